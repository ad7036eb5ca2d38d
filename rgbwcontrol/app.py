# rgbw-control RGB to RGBW Color Converter
# Copyright 2026 jackw01. Released under the MIT License (see LICENSE for details).

import atexit
from pathlib import Path
from flask import Flask, request, jsonify
from rgbwcontrol.converter import ColorConverter, CalibrationError
from rgbwcontrol.colors import (ColorRgb, clamp_rgbw, pack_rgbw,
                                reorder_channels)

import rgbwcontrol.settings as settings_file

import logging
logging.basicConfig(level=logging.INFO)

# Keeps stretched output well inside int64
MAX_CHANNEL_VALUE = 65535

def create_app(config_file, pixel_order=None, dev=False):
    app = Flask(__name__)

    # Create file if it doesn't exist already
    if config_file is not None:
        filename = Path(config_file)
    else:
        if dev:
            # In dev mode, use local config file in current directory
            filename = Path.cwd() / 'rgbwcontrol-dev.json'
            app.logger.info(f'Dev mode: Using config file at {filename}')
        else:
            filename = Path('/etc') / 'rgbwcontrol.json'

    settings = settings_file.load_settings(filename)
    if pixel_order is not None:
        if not settings_file.is_valid_pixel_order(pixel_order):
            raise ValueError(f'Invalid pixel order {pixel_order!r}')
        settings['pixel_order'] = pixel_order.upper()

    converter = ColorConverter()
    try:
        converter.update_settings(settings['calibration'])
    except (TypeError, ValueError) as e:
        app.logger.warning(f'Saved calibration at {filename} is invalid ({e}), using defaults.')
        settings['calibration'] = converter.get_settings()

    def set_log_level(level):
        lvl = getattr(logging, str(level).upper(), logging.INFO)
        logging.getLogger().setLevel(lvl)
        app.logger.setLevel(lvl)

    set_log_level(settings['log_level'])

    def save_settings():
        'Save calibration and output settings'
        settings['calibration'] = converter.get_settings()
        settings_file.save_settings(filename, settings)

    def error_response(message):
        app.logger.warning(message)
        return jsonify(error=message), 400

    @app.get('/getsettings')
    def get_settings():
        'Get calibration and output settings'
        result = converter.get_settings()
        result['pixel_order'] = settings['pixel_order']
        result['log_level'] = settings['log_level']
        return jsonify(result)

    @app.post('/updatesettings')
    def update_settings():
        'Update calibration and output settings'
        new_settings = request.get_json(force=True)
        if not isinstance(new_settings, dict):
            return error_response('Settings must be a JSON object')

        # Apply to a copy first so a failing step leaves everything untouched
        staged = ColorConverter()
        staged.update_settings(converter.get_settings())
        order = settings['pixel_order']
        try:
            if 'pixel_order' in new_settings:
                if not settings_file.is_valid_pixel_order(new_settings['pixel_order']):
                    return error_response(f'Invalid pixel order {new_settings["pixel_order"]!r}')
                order = new_settings['pixel_order'].upper()
            if 'white_equiv' in new_settings:
                v = new_settings['white_equiv']
                staged.set_white_equiv(float(v['rgb_value']), float(v['white_value']))
            if 'rgb_white_equiv' in new_settings:
                v = new_settings['rgb_white_equiv']
                staged.set_rgb_white_equiv(float(v['red_value']),
                                           float(v['green_value']),
                                           float(v['blue_value']),
                                           float(v['white_value']))
            if 'overdrive' in new_settings:
                staged.set_overdrive(float(new_settings['overdrive']))
        except CalibrationError as e:
            return error_response(f'Invalid calibration: {e}')
        except (KeyError, TypeError, ValueError) as e:
            return error_response(f'Malformed settings: {e!r}')

        converter.update_settings(staged.get_settings())
        settings['pixel_order'] = order
        save_settings()
        return jsonify(result='')

    @app.get('/getmaxoverdrive')
    def get_max_overdrive():
        'Highest overdrive that keeps full white on the white channel only'
        white_value = request.args.get('white_value', type=float)
        if white_value is None:
            return error_response('white_value is required')
        return jsonify(max_overdrive=converter.get_max_unstretched_overdrive(white_value))

    @app.post('/convert')
    def convert():
        'Converts a list of RGB colors to RGBW'
        data = request.get_json(force=True)
        try:
            colors = [ColorRgb(*(int(c) for c in color)) for color in data['colors']]
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            return error_response(f'Malformed colors: {e!r}')
        if any(min(color) < 0 or max(color) > MAX_CHANNEL_VALUE for color in colors):
            return error_response(f'Color channels must be between 0 and {MAX_CHANNEL_VALUE}')

        converted = [tuple(int(c) for c in row) for row in converter.rgb_to_rgbw_array(colors)]
        if data.get('clamp', False):
            converted = [clamp_rgbw(color) for color in converted]

        return jsonify(colors=[list(color) for color in converted],
                       channels=[reorder_channels(color, settings['pixel_order'])
                                 for color in converted],
                       packed=[pack_rgbw(*color) for color in converted])

    @app.get('/api/loglevel')
    def api_get_loglevel():
        return {'log_level': settings['log_level']}

    @app.post('/api/loglevel')
    def api_set_loglevel():
        data = request.get_json(force=True)
        level = data.get('log_level', 'INFO')
        settings['log_level'] = level
        set_log_level(level)
        save_settings()
        return {'status': 'ok'}

    atexit.register(save_settings)

    app.converter = converter
    app.settings = settings
    return app

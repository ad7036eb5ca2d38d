# rgbw-control RGB to RGBW Color Converter
# Copyright 2026 jackw01. Released under the MIT License (see LICENSE for details).

import json
import shutil
import logging
from pathlib import Path

from rgbwcontrol.colors import VALID_PIXEL_ORDERS
from rgbwcontrol.converter import ColorConverter

logger = logging.getLogger(__name__)

SAVE_VERSION = 1

config_defaults = {
    'calibration': ColorConverter().get_settings(),
    'pixel_order': 'GRBW',  # SK6812
    'log_level': 'INFO',
}

def default_settings():
    return json.loads(json.dumps(config_defaults))

def is_valid_pixel_order(pixel_order):
    return isinstance(pixel_order, str) and pixel_order.upper() in VALID_PIXEL_ORDERS

def load_settings(filename):
    """
    Read the settings file, creating it if it doesn't exist.
    Missing keys are filled in from config_defaults. A file that can't be
    parsed is backed up to <name>.json.error and defaults are used instead.
    """
    filename = Path(filename)
    filename.touch(exist_ok=True)

    settings = default_settings()
    with filename.open('r') as data_file:
        settings_str = data_file.read()

    if settings_str.strip() == '':
        logger.info(f'Creating new settings file at {filename}.')
        return settings

    try:
        saved = json.loads(settings_str)
        if not isinstance(saved, dict) or not isinstance(saved.get('calibration', {}), dict):
            raise ValueError('settings file must contain a JSON object')
        settings['calibration'].update(saved.get('calibration', {}))
        for k in ('pixel_order', 'log_level'):
            if k in saved:
                settings[k] = saved[k]
        if not is_valid_pixel_order(settings['pixel_order']):
            logger.warning(f'Invalid pixel order {settings["pixel_order"]!r} in {filename}, '
                           f'using {config_defaults["pixel_order"]}.')
            settings['pixel_order'] = config_defaults['pixel_order']
        settings['pixel_order'] = settings['pixel_order'].upper()
        logger.info(f'Loaded saved settings from {filename}')
    except ValueError:
        logger.warning(f'Saved settings at {filename} are invalid. Making a backup of the old file to '
                       f'{filename.with_suffix(".json.error")} and using default settings.')
        shutil.copyfile(filename, filename.with_suffix('.json.error'))
        settings = default_settings()

    return settings

def save_settings(filename, settings):
    'Write settings to disk. Returns True on success.'
    filename = Path(filename)
    data = {
        'save_version': SAVE_VERSION,
        'calibration': settings['calibration'],
        'pixel_order': settings['pixel_order'],
        'log_level': settings['log_level'],
    }
    try:
        with filename.open('w') as data_file:
            json.dump(data, data_file, sort_keys=True, indent=4)
        logger.info(f'Saved settings to {filename}')
        return True
    except PermissionError:
        logger.error(f'No permission to write to {filename}')
        logger.error('Hint: Use --config_file to specify a writable location, or run in dev mode (--dev)')
    except OSError as e:
        logger.error(f'Could not save settings to {filename}: {e}', exc_info=True)
    return False

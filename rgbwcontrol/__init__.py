# rgbw-control RGB to RGBW Color Converter
# Copyright 2026 jackw01. Released under the MIT License (see LICENSE for details).

import argparse

from rgbwcontrol.colors import (ColorRgb, ColorRgbw, clamp_rgbw, pack_rgbw,
                                unpack_rgbw, parse_color, reorder_channels)
from rgbwcontrol.converter import ColorConverter, CalibrationError

__version__ = '1.0.0'

def main(argv=None):
    parser = argparse.ArgumentParser(description='Convert RGB colors to calibrated RGBW values')
    parser.add_argument('colors', nargs='*',
                        help='Colors to convert, as r,g,b or #rrggbb')
    parser.add_argument('--config_file',
                        help='Location of settings file to read calibration from')
    parser.add_argument('--overdrive', type=float,
                        help='Share of the extra white channel brightness to use, from slightly negative to 1.0')
    parser.add_argument('--white_equiv', type=float, nargs=2, metavar=('RGB', 'WHITE'),
                        help='Calibration: RGB level that matches the brightness of the given white level')
    parser.add_argument('--rgb_white_equiv', type=float, nargs=4, metavar=('RED', 'GREEN', 'BLUE', 'WHITE'),
                        help='Calibration: RGB levels that match the brightness and color of the given white level')
    parser.add_argument('--pixel_order',
                        help='LED color channel order for output, e.g. GRBW. Default: from settings file')
    parser.add_argument('--clamp', action='store_true',
                        help='Limit output channels to 0-255. Default: False')
    parser.add_argument('--serve', action='store_true',
                        help='Run the web API instead of converting colors. Default: False')
    parser.add_argument('--port', type=int, default=80,
                        help='Port to use for web API. Default: 80')
    parser.add_argument('--host', default='0.0.0.0',
                        help='Hostname to use for web API. Default: 0.0.0.0')
    parser.add_argument('--dev', action='store_true',
                        help='Development flag. Default: False')
    args = parser.parse_args(argv)

    if args.serve:
        from rgbwcontrol.app import create_app
        from rgbwcontrol.settings import is_valid_pixel_order
        if args.pixel_order is not None and not is_valid_pixel_order(args.pixel_order):
            parser.error(f'invalid pixel order {args.pixel_order!r}')
        app = create_app(args.config_file, args.pixel_order, args.dev)
        app.run(host=args.host, port=args.port, debug=args.dev, use_reloader=False)
        return 0

    converter = ColorConverter()
    pixel_order = args.pixel_order
    if args.config_file is not None:
        from rgbwcontrol.settings import load_settings
        settings = load_settings(args.config_file)
        try:
            converter.update_settings(settings['calibration'])
        except CalibrationError as e:
            parser.error(f'invalid calibration in {args.config_file}: {e}')
        if pixel_order is None:
            pixel_order = settings['pixel_order']

    try:
        if args.white_equiv is not None:
            converter.set_white_equiv(*args.white_equiv)
        if args.rgb_white_equiv is not None:
            converter.set_rgb_white_equiv(*args.rgb_white_equiv)
    except CalibrationError as e:
        parser.error(str(e))
    if args.overdrive is not None:
        converter.set_overdrive(args.overdrive)

    try:
        colors = [parse_color(c) for c in args.colors]
    except ValueError as e:
        parser.error(str(e))

    for color in colors:
        out = converter.rgb_to_rgbw(color)
        if args.clamp:
            out = clamp_rgbw(out)
        line = 'RGB({}, {}, {}) -> RGBW({}, {}, {}, {})'.format(*color, *out)
        if pixel_order is not None:
            try:
                channels = reorder_channels(out, pixel_order)
            except ValueError as e:
                parser.error(str(e))
            line += ' {}({})'.format(pixel_order.upper(), ', '.join(str(c) for c in channels))
        print(line)

    return 0

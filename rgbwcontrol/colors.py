# rgbw-control RGB to RGBW Color Converter
# Copyright 2026 jackw01. Released under the MIT License (see LICENSE for details).

from typing import NamedTuple

# 0-255 based RGB color triplet
class ColorRgb(NamedTuple):
    red: int
    green: int
    blue: int

# 0-255 based RGBW color quadruplet
class ColorRgbw(NamedTuple):
    red: int
    green: int
    blue: int
    white: int

VALID_PIXEL_ORDERS = ('RGB', 'RBG', 'GRB', 'GBR', 'BRG', 'BGR',
                      'RGBW', 'RBGW', 'GRBW', 'GBRW', 'BRGW', 'BGRW')

def clamp(value, min_val, max_val):
    return max(min_val, min(max_val, value))

def clamp_rgbw(color):
    'Limit every channel of an RGBW color to the 0-255 device range'
    return ColorRgbw(*(clamp(int(c), 0, 255) for c in color))

def pack_rgbw(r, g, b, w):
    """Pack RGBW values into a single 32-bit integer, saturating each channel at 255"""
    r, g, b, w = (clamp(int(c), 0, 255) for c in (r, g, b, w))
    return (w << 24) | (r << 16) | (g << 8) | b

def unpack_rgbw(color):
    """Unpack RGBW values from a 32-bit integer"""
    return ColorRgbw((color >> 16) & 0xFF,
                     (color >> 8) & 0xFF,
                     color & 0xFF,
                     (color >> 24) & 0xFF)

def reorder_channels(color, pixel_order):
    """
    Return the channel values of an RGBW color in the order a LED part expects.
    A pixel order without W drops the white channel.
    """
    pixel_order = pixel_order.upper()
    if pixel_order not in VALID_PIXEL_ORDERS:
        raise ValueError(f'Invalid pixel order {pixel_order!r}, '
                         f'expected one of {", ".join(VALID_PIXEL_ORDERS)}')
    channels = {'R': color[0], 'G': color[1], 'B': color[2], 'W': color[3]}
    return [channels[c] for c in pixel_order]

def parse_color(text):
    """
    Parse a color given as "r,g,b" or as a hex string "#rrggbb".
    Raises ValueError for anything else.
    """
    text = text.strip()
    if text.startswith('#'):
        digits = text[1:]
        if len(digits) != 6 or digits[0] in '+-':
            raise ValueError(f'Invalid hex color {text!r}')
        value = int(digits, 16)
        return ColorRgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    parts = text.split(',')
    if len(parts) != 3:
        raise ValueError(f'Invalid color {text!r}, expected r,g,b or #rrggbb')
    r, g, b = (int(p) for p in parts)
    if min(r, g, b) < 0:
        raise ValueError(f'Invalid color {text!r}, channels must not be negative')
    return ColorRgb(r, g, b)

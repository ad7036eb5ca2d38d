# rgbw-control RGB to RGBW Color Converter
# Copyright 2026 jackw01. Released under the MIT License (see LICENSE for details).

import logging
import math
import numpy as np

from rgbwcontrol.colors import ColorRgbw

logger = logging.getLogger(__name__)

# Calibration of the reference part
DEFAULT_R_EQUIV = 625.0
DEFAULT_G_EQUIV = 400.0
DEFAULT_B_EQUIV = 223.0
DEFAULT_W_EQUIV = 625.0
DEFAULT_OVERDRIVE = 0.6

class CalibrationError(ValueError):
    pass

def _check_equiv(**values):
    for name, value in values.items():
        if not (math.isfinite(value) and value > 0):
            raise CalibrationError(f'{name} must be a finite value greater than zero, got {value}')

def _check_white_value(white_value):
    if white_value == 0:
        raise CalibrationError('white_value must not be zero')

class ColorConverter:
    """
    Converts theoretical RGB colors to device RGBW colors.

    The calibration says how much white-equivalent brightness one unit of each
    RGB channel produces. Calibration only changes through the setters, so
    conversions always see a consistent set of values.
    """

    def __init__(self):
        self._r_equiv = DEFAULT_R_EQUIV
        self._g_equiv = DEFAULT_G_EQUIV
        self._b_equiv = DEFAULT_B_EQUIV
        self._w_equiv = DEFAULT_W_EQUIV
        self._overdrive = DEFAULT_OVERDRIVE

    @property
    def r_equiv(self):
        return self._r_equiv

    @property
    def g_equiv(self):
        return self._g_equiv

    @property
    def b_equiv(self):
        return self._b_equiv

    @property
    def w_equiv(self):
        return self._w_equiv

    @property
    def overdrive(self):
        return self._overdrive

    def set_white_equiv(self, rgb_value, white_value):
        """
        Set a basic RGB-to-white equivalence. The inputs come from a calibration
        showing that RGBW (rgb_value, rgb_value, rgb_value, 0) is about as bright
        as RGBW (0, 0, 0, white_value). Both should be strictly positive.
        """
        _check_white_value(white_value)
        w_equiv = 255.0 * rgb_value / white_value
        _check_equiv(w_equiv=w_equiv)

        self._w_equiv = w_equiv
        self._r_equiv = w_equiv
        self._g_equiv = w_equiv
        self._b_equiv = w_equiv
        logger.debug('White equivalence set to %.3f', w_equiv)

    def set_rgb_white_equiv(self, red_value, green_value, blue_value, white_value):
        """
        Set a part-specific RGB-to-white equivalence. The inputs come from a
        calibration showing that RGBW (red_value, green_value, blue_value, 0)
        has the same brightness and color as RGBW (0, 0, 0, white_value).
        """
        _check_white_value(white_value)
        r_equiv = 255.0 * red_value / white_value
        g_equiv = 255.0 * green_value / white_value
        b_equiv = 255.0 * blue_value / white_value
        _check_equiv(r_equiv=r_equiv, g_equiv=g_equiv, b_equiv=b_equiv)

        self._r_equiv = r_equiv
        self._g_equiv = g_equiv
        self._b_equiv = b_equiv
        self._w_equiv = max(r_equiv, g_equiv, b_equiv)
        logger.debug('RGB white equivalence set to r=%.3f g=%.3f b=%.3f (w=%.3f)',
                     r_equiv, g_equiv, b_equiv, self._w_equiv)

    def set_overdrive(self, overdrive):
        """
        Set how much of the extra brightness gamut of RGBW over RGB to use,
        from slightly negative up to 1.0. At 0.0 colors look mostly the same
        as plain RGB but white stays white across parts. At 1.0 whiter colors
        get as bright as the white channel allows.
        """
        self._overdrive = overdrive
        logger.debug('Overdrive set to %.3f', overdrive)

    def get_max_unstretched_overdrive(self, white_value):
        """
        Highest overdrive that still shows RGB (255, 255, 255) as pure white
        (no r, g, b) for the calibrated white_value. Past this value the RGB
        emitters are added on top of the full power white channel.
        """
        return 1 - (white_value / 255)

    def get_settings(self):
        return {
            'r_equiv': self._r_equiv,
            'g_equiv': self._g_equiv,
            'b_equiv': self._b_equiv,
            'w_equiv': self._w_equiv,
            'overdrive': self._overdrive,
        }

    def update_settings(self, new_settings):
        """
        Restore calibration values previously returned by get_settings.
        w_equiv is always recomputed as the largest channel ratio.
        """
        r_equiv = float(new_settings.get('r_equiv', self._r_equiv))
        g_equiv = float(new_settings.get('g_equiv', self._g_equiv))
        b_equiv = float(new_settings.get('b_equiv', self._b_equiv))
        _check_equiv(r_equiv=r_equiv, g_equiv=g_equiv, b_equiv=b_equiv)
        w_equiv = max(r_equiv, g_equiv, b_equiv)

        self._r_equiv = r_equiv
        self._g_equiv = g_equiv
        self._b_equiv = b_equiv
        self._w_equiv = w_equiv
        if 'overdrive' in new_settings:
            self._overdrive = float(new_settings['overdrive'])

    def rgb_to_rgbw(self, in_color):
        'Convert a theoretical RGB value to a device RGBW value'
        red, green, blue = in_color

        # If-chain instead of max() so the shift of the winning channel is
        # picked at the same time. Ties go to blue, then green, then red.
        if green >= red:
            high = green
            this_shift = self._w_equiv / self._g_equiv
        else:
            high = red
            this_shift = self._w_equiv / self._r_equiv
        if blue >= high:
            high = blue
            this_shift = self._w_equiv / self._b_equiv

        # Pre-empt division by zero
        if high < 1:
            return ColorRgbw(0, 0, 0, 0)

        low = min(red, green, blue)
        saturation = (high - low) / float(high)

        # Expand the RGB gamut out to a fictitious range whose brightest point,
        # in RGB space, looks the same as (255, 255, 255, overdrive*255) in RGBW.
        max_shift = self._overdrive * self._w_equiv

        # The most saturated colors cannot be stretched as far. This makes
        # maximal use of the expanded gamut but has a discontinuous derivative,
        # which can show up on smooth gradients crossing the saturation cutoff.
        if saturation * (255 + max_shift) < this_shift * 255.0:
            stretch = (255 + max_shift) / 255.0
        else:
            stretch = this_shift / saturation

        fic_r = stretch * red
        fic_g = stretch * green
        fic_b = stretch * blue

        # The kernel vector (-w_equiv, -w_equiv, -w_equiv, 255) can be added in
        # any amount without changing appearance. Take min to prevent W overflow.
        fic_low = min(stretch * low, self._w_equiv)

        # Shrink from ideal RGB values back to device values
        return ColorRgbw(int((fic_r - fic_low) * self._r_equiv / self._w_equiv + 0.5),
                         int((fic_g - fic_low) * self._g_equiv / self._w_equiv + 0.5),
                         int((fic_b - fic_low) * self._b_equiv / self._w_equiv + 0.5),
                         int(fic_low * 255.0 / self._w_equiv + 0.5))

    def rgb_to_rgbw_array(self, pixels):
        """
        Convert a whole frame at once.

        Args:
            pixels: array-like of shape (N, 3) with RGB values

        Returns:
            int64 array of shape (N, 4), row for row equal to rgb_to_rgbw
        """
        rgb = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)
        red, green, blue = rgb[:, 0], rgb[:, 1], rgb[:, 2]
        w_equiv = self._w_equiv

        green_wins = green >= red
        high = np.where(green_wins, green, red)
        this_shift = np.where(green_wins, w_equiv / self._g_equiv, w_equiv / self._r_equiv)
        blue_wins = blue >= high
        high = np.where(blue_wins, blue, high)
        this_shift = np.where(blue_wins, w_equiv / self._b_equiv, this_shift)

        lit = high >= 1
        low = rgb.min(axis=1)
        saturation = (high - low) / np.where(lit, high, 1.0)

        max_shift = self._overdrive * w_equiv
        low_saturation = saturation * (255 + max_shift) < this_shift * 255.0
        stretch = np.where(low_saturation,
                           (255 + max_shift) / 255.0,
                           this_shift / np.where(low_saturation, 1.0, saturation))

        fic = rgb * stretch[:, np.newaxis]
        fic_low = np.minimum(stretch * low, w_equiv)

        equiv = np.array([self._r_equiv, self._g_equiv, self._b_equiv])
        out = np.zeros((rgb.shape[0], 4), dtype=np.int64)
        out[:, 0:3] = np.trunc((fic - fic_low[:, np.newaxis]) * equiv / w_equiv + 0.5)
        out[:, 3] = np.trunc(fic_low * 255.0 / w_equiv + 0.5)
        out[~lit] = 0
        return out

"""Tests for the command line interface."""

import json

import pytest

from rgbwcontrol import main


def test_convert_colors(capsys):
    assert main(['255,255,255', '#000000']) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ['RGB(255, 255, 255) -> RGBW(5, 3, 2, 255)',
                     'RGB(0, 0, 0) -> RGBW(0, 0, 0, 0)']


def test_overdrive(capsys):
    main(['255,255,255', '--overdrive', '0'])
    assert capsys.readouterr().out.strip() == 'RGB(255, 255, 255) -> RGBW(0, 0, 0, 104)'


def test_white_equiv(capsys):
    main(['255,255,255', '--white_equiv', '255', '255', '--overdrive', '0'])
    assert capsys.readouterr().out.strip() == 'RGB(255, 255, 255) -> RGBW(0, 0, 0, 255)'


def test_pixel_order_and_clamp(capsys):
    main(['255,255,0', '--pixel_order', 'grbw', '--clamp'])
    assert capsys.readouterr().out.strip() == 'RGB(255, 255, 0) -> RGBW(255, 255, 0, 0) GRBW(255, 255, 0, 0)'


def test_unclamped_by_default(capsys):
    main(['255,255,0'])
    assert capsys.readouterr().out.strip() == 'RGB(255, 255, 0) -> RGBW(398, 255, 0, 0)'


def test_config_file(tmp_path, capsys):
    filename = tmp_path / 'rgbwcontrol.json'
    filename.write_text(json.dumps({'calibration': {'overdrive': 0.0}, 'pixel_order': 'RGBW'}))
    main(['255,255,255', '--config_file', str(filename)])
    assert capsys.readouterr().out.strip() == 'RGB(255, 255, 255) -> RGBW(0, 0, 0, 104) RGBW(0, 0, 0, 104)'


@pytest.mark.parametrize('argv', [
    ['1,2'],
    ['255,255,255', '--white_equiv', '100', '0'],
    ['255,255,255', '--rgb_white_equiv', '100', '100', '100', '0'],
    ['255,255,255', '--pixel_order', 'XYZ'],
])
def test_invalid_arguments_exit(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_serve_rejects_invalid_pixel_order(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(['--serve', '--pixel_order', 'XYZ', '--config_file', str(tmp_path / 'rgbwcontrol.json')])
    assert excinfo.value.code == 2

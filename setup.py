#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import find_packages, setup

requirements = [
    'Flask>=2.2.2',
    'Werkzeug>=2.2.2',
    'numpy>=1.26.4',
]

test_requirements = [
    'pytest>=7.0',
]

setup(
    name='rgbw-control',
    version='1.0.0',
    description='Calibrated RGB to RGBW color conversion for LED strips with a white channel',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='jackw01',
    python_requires='>=3.8.0',
    url='https://github.com/jackw01/rgbw-control',
    packages=find_packages(exclude=['tests', 'tests.*']),
    zip_safe=False,
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'rgbwcontrol=rgbwcontrol:main'
        ]
    },
    license='MIT',
    classifiers=[
        # Trove classifiers
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy'
    ]
)

from setuptools import setup
import re

with open('README.md') as fd:
    long_description = fd.read()

with open('dimensional/__init__.py', 'r') as fd:
    version = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        fd.read(),
        re.MULTILINE).group(1)

setup(
    name='dimensional',
    version=version,
    description='N-dimensional arrays with named, coordinate-aware axes',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=[
        'dimensional',
        'dimensional.core',
        'dimensional.util'
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy'
    ],
    extras_require={
        'test': ['pytest']
    }
)

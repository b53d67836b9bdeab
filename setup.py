"""
Setup script for the FlowGate package
"""
from setuptools import setup, find_packages

# read in version string
VERSION_FILE = 'src/flowgate/_version.py'
__version__ = None  # to avoid inspection warning and check if __version__ was loaded
exec(open(VERSION_FILE).read())

if __version__ is None:
    raise RuntimeError("__version__ string not found in file %s" % VERSION_FILE)

with open("README.md", "r", encoding='utf-8') as fh:
    long_description = fh.read()

reqs = [
    'bokeh>=3.5',
    'flowio>=1.4.0,<1.5',
    'flowutils>=1.2.2,<1.3',
    'numpy>2',
    'pandas>=2.2',
    'psutil>=7',
    'scikit-learn>=1.5',
    'scipy>=1.14'
]

setup(
    name='FlowGate',
    version=__version__,  # noqa PyTypeChecker
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    package_data={'': ['*.pyi']},
    include_package_data=True,
    description='Automated gating of flow cytometry sample batches',
    long_description=long_description,
    long_description_content_type="text/markdown",
    license='BSD',
    ext_modules=[],
    install_requires=reqs,
    extras_require={
        'test': ['pytest']
    },
    classifiers=[
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.10'
    ]
)

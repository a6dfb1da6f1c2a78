from setuptools import setup, find_packages
import os

# Read README.md if it exists
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', encoding='utf-8') as f:
        long_description = f.read()

# Read requirements.txt
requirements = []
if os.path.exists('requirements.txt'):
    with open('requirements.txt', encoding='utf-8') as f:
        requirements = [line.strip() for line in f
                       if line.strip() and not line.startswith('#')]

setup(
    name="pentacell",
    version="0.1.0",
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
        ],
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.0.0',
        ],
    },
    python_requires=">=3.8",
    description="Hierarchical equal-area pentagonal spatial index on the sphere",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    keywords="geospatial, dggs, spatial-index, pentagon, dodecahedron, equal-area, hilbert-curve",
    entry_points={
        'console_scripts': [
            'pentacell=pentacell.cli:main',
        ],
    },
    zip_safe=False,
)

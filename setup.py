from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs>=15.0',
    'pymongo>=4.0',
]

setup(
    name='lazymint',
    version=__version__,
    description='Sparse ownership ledger for non-fungible tokens held mostly by one default holder.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    zip_safe=True,
    include_package_data=True,
)

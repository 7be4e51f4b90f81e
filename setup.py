from setuptools import setup, find_packages

setup(
    name='vmc_sdk_python',
    version='0.1.0',
    description='VMC protocol receiver: applies OSC avatar motion to a humanoid model',
    packages=find_packages(include=['vmc_sdk_python', 'vmc_sdk_python.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'scipy',
    ],
    extras_require={
        'test': ['pytest'],
    },
)

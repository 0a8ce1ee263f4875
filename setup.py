from setuptools import setup, find_packages


setup(
    name='torch_bicgstab',
    version='0.1.0',
    packages=find_packages(include=['torch_bicgstab', 'torch_bicgstab.*']),
    install_requires=[
        'torch>=2.0.0',
    ],
    extras_require={
        'test':['pytest','numpy','scipy'],
        'docs':['sphinx','furo']
    }
)

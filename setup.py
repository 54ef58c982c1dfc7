from setuptools import setup, find_packages


setup(
    name='quatkit',
    version='1.0.0',
    description='Quaternion rotation value type with angle/axis, vector to vector, slerp and rotation matrix '
                'conversions',
    packages=find_packages(include=['quatkit', 'quatkit.*']),
    python_requires='>=3.10',
    install_requires=['numpy', 'pandas'],
    extras_require={'test': ['pytest', 'scipy']},
)

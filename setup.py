from setuptools import find_packages, setup


setup(
    name = 'predex',
    description = 'Build rule that pre-dexes Java libraries containing class files',
    license = 'MIT',
    packages = find_packages(exclude=['tests*']),
    install_requires = [
        'PyYAML',
        'startup',
    ],
)

import setuptools

setuptools.setup(
    name = 'sdlib',
    version = '1.0',
    description = 'interactive subdivision curve tools',
    packages = setuptools.find_packages(exclude=['tests']),
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
)

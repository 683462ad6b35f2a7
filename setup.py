import setuptools

import mishell.version

with open("README.md", "r") as readme:
    long_description = readme.read()

setuptools.setup(
    name='mishell',
    version=mishell.version.VERSION,
    author='Mishell developers',
    description='A minimal interactive shell',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages('.', include=['mishell', 'mishell.*']),
    scripts=['bin/mishell'],
    install_requires=['prompt_toolkit', 'psutil'],
    extras_require={'test': ['pytest', 'dill']},
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX :: Linux'
    ],
    python_requires='>=3.7'
)

from setuptools import setup, find_packages
from src import wsm

MAJOR_VERSION = '0'
MINOR_VERSION = '1'
MICRO_VERSION = '0'
VERSION = '{}.{}.{}'.format(MAJOR_VERSION, MINOR_VERSION, MICRO_VERSION)

setup(
    name='wsm',
    version=VERSION,
    description='Pick a git project from your workspaces, open its tmux '
                'session.',
    long_description=wsm.__doc__,
    author=wsm.__author__,
    author_email=wsm.__email__,
    license=wsm.__license__,
    url='http://github.com/rafi/wsm',
    keywords='tmux git workspace project session picker',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    install_requires=['PyYAML'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.5',
    platforms='any',
    zip_safe=False,
    entry_points={
        'console_scripts': ['wsm = wsm.cli:main']
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: Unix',
        'Operating System :: POSIX',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development',
        'Topic :: Terminals :: Terminal Emulators/X Terminals',
        'Topic :: Utilities'
    ]
)

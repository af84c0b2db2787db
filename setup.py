from setuptools import find_packages, setup

setup(
    name='commitlanes',
    version='0.1',
    description='Commit graph layout: lanes, branch colors and SVG edge paths',
    author='Iliyas Jorio',
    classifiers=[
        'Topic :: Software Development :: Version Control :: Git',
        'Intended Audience :: Developers',
    ],
    packages=find_packages(include=['commitlanes', 'commitlanes.*']),
    entry_points={
        'console_scripts': ['commitlanes=commitlanes.graph.__main__:main']
    },
    python_requires='>= 3.11',
    install_requires=[
        'pygit2 >= 1.14',
    ],
    extras_require={
        'memory-indicator': ['psutil'],
        'test': ['pytest'],
    },
)

from setuptools import setup, find_packages

with open('README.md') as f:
    long_description = f.read()

with open('requirements.txt') as f:
    requirements = f.read()

setup(
    name='vntrkmers',
    version='0.1.0',
    description='Extract tandem-repeat and flanking k-mers of VNTR loci',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='GPLv3',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'vntrkmers=vntrkmers.__main__:safe_entry_point',
        ]
    },
)

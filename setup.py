from glob import glob
from setuptools import setup


setup(
    name='rpncalc',
    version='1.0.0',
    description='RPN scientific calculator',
    url='https://github.com/pilona/RPN',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    author='Alex Pilon',
    author_email='alp@alexpilon.ca',
    packages=['rpncalc', 'rpncalc.commands'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.8',
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)

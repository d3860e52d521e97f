from setuptools import setup

setup(
    name='pando-language-server',
    version='0.1.0',
    description='Static analyzer and language server for the Pando language',
    author='Pando contributors',
    package_dir={'pando': 'src/pando'},
    packages=['pando', 'pando.cli', 'pando.lsp'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=9.0',
        'pygls>=1.1,<2',
        'lsprotocol>=2023.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'pando = pando.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)

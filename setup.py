from setuptools import setup, find_packages
setup(
    name='flavorizr',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'flavorizr': [
            'flavors.yaml',
        ],
    },
    description='Canonical Android product flavor table and Gradle fragment generator.',
    author='Your Name',
    author_email='youremail@example.com',
    python_requires='>=3.8',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'flavorizr = flavorizr.cli:program.run',
        ],
        'pytest11': [
            'flavorizr = flavorizr.pytest_plugin',
        ],
    },
)

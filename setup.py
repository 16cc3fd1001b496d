from setuptools import setup, find_packages

setup(
    name="salesim",
    version="1.0.0",
    packages=find_packages(include=["salesim", "salesim.*", "webapp"]),
    py_modules=["run_simulation"],
    install_requires=[
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "matplotlib>=3.7.0",
        "seaborn>=0.13.0",
        "flask>=3.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    description="Daily stock and cash simulation for a single-product reseller",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering :: Information Analysis",
    ],
    entry_points={
        'console_scripts': [
            'run-simulation=run_simulation:main',
        ],
    },
    include_package_data=True,
    package_data={
        'webapp': ['templates/*.html'],
    },
)

from setuptools import setup, find_packages

setup(
    name="frenemies",
    version="0.1.0",
    description="Reference-identity sealed envelopes for exchanging values across untrusted relays",
    python_requires=">=3.9",
    packages=find_packages(include=["frenemies", "frenemies.*"]),
    install_requires=["pyyaml>=6.0.0"],
    extras_require={
        "dev": ["pytest>=7.4.0"],
    },
    entry_points={"console_scripts": ["frenemies=frenemies.cli:main"]},
    include_package_data=True,
    package_data={"frenemies": ["policies/*.yaml"]},
    keywords=["capabilities", "object-capability", "sealing", "access-control"],
    license="Apache-2.0",
)

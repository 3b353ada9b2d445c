import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="stbmatch",
    version="0.1.0",
    description="Placing applicants into capacity limited slots with "
                "Deferred Acceptance and a Single Tie Break",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests"]),
    install_requires=['numpy', 'scipy', 'numba'],
    extras_require={'test': ['pytest']},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

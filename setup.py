"""simian.

simian
------

Query, boot and shut down simulator devices from the command line.

"""
from setuptools import find_packages, setup

about = {}
with open("src/simian/__about__.py", encoding="utf-8") as fp:
    exec(fp.read(), about)

tests_reqs = ["pytest", "syrupy"]

readme = open("README.md", encoding="utf-8").read()


setup(
    name=about["__title__"],
    version=about["__version__"],
    license=about["__license__"],
    author=about["__author__"],
    description=about["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=["typing-extensions"],
    extras_require={"test": tests_reqs},
    entry_points={"console_scripts": ["simian = simian.cli:main"]},
    zip_safe=False,
    keywords=about["__title__"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS :: MacOS X",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Utilities",
        "Topic :: Software Development :: Testing",
    ],
)

from setuptools import setup

__version__ = "0.1.0"


def get_long_desc():
    return open('README.rst', 'r').read()


def get_requirements():
    lines = open('requirements.txt', 'r').readlines()
    reqs = [line.strip() for line in lines if line.strip()]
    return reqs


setup(
    name="kubegen",
    version=__version__,
    packages=["kubegen"],
    description="kubegen turns the Kubernetes API schema into Python dataclasses, "
                "one class per API object kind",
    long_description=get_long_desc(),
    long_description_content_type="text/x-rst",
    keywords=["Kubernetes", "modelling", "JSON", "schema", "OpenAPI", "swagger",
              "codegen", "dataclasses"],
    install_requires=get_requirements(),
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["kubegen = kubegen.cli:main"]},
    python_requires=">=3.8",
    classifiers=["Development Status :: 4 - Beta",
                 "Intended Audience :: Developers",
                 "License :: OSI Approved :: MIT License",
                 "Operating System :: OS Independent",
                 "Programming Language :: Python :: 3 :: Only",
                 "Programming Language :: Python :: 3.8",
                 "Programming Language :: Python :: 3.9",
                 "Programming Language :: Python :: 3.10",
                 "Programming Language :: Python :: 3.11",
                 "Topic :: Software Development",
                 "Topic :: Software Development :: Code Generators",
                 "Topic :: Software Development :: Libraries :: Python Modules",
                 "Topic :: Utilities",
                 "Typing :: Typed"],
    license="MIT"
)

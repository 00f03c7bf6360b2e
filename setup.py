from setuptools import Command, find_namespace_packages, setup

from collections import defaultdict

INSTALL_REQUIRES = [
    "numpy>=1.22.3",
    "pandas>=1.4",
    "statsmodels>=0.12",
    "numba>=0.56",
]

EXTRAS_REQUIRE = {"test": ["pytest>=7.3"]}


class CleanCommand(Command):
    def run(self) -> None:
        raise NotImplementedError("Use git clean -xfd instead")

    def initialize_options(self) -> None:
        pass

    def finalize_options(self) -> None:
        pass


cmdclass = {"clean": CleanCommand}

with open("README.md") as readme:
    description = readme.read()

package_data = defaultdict(list)
package_data["lrvar"].append("py.typed")


def run_setup() -> None:
    setup(
        name="lrvar",
        version="1.0.0",
        description="Kernel and autoregressive spectral long-run variance estimators",
        long_description=description,
        long_description_content_type="text/markdown",
        packages=find_namespace_packages(include=["lrvar", "lrvar.*"]),
        package_dir={"lrvar": "./lrvar"},
        cmdclass=cmdclass,
        zip_safe=False,
        include_package_data=False,
        package_data=package_data,
        python_requires=">=3.10",
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
    )


run_setup()

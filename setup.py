"""Set-up file for BoxFlux for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()

with open("requirements-dev.txt") as f:
    required_dev = f.read().splitlines()


setup(
    name="boxflux",
    version="0.1.0",
    license="GPL",
    keywords=["porous media simulation box method multiphase flux"],
    install_requires=required,
    extras_require={"testing": required_dev},
    description=(
        "Flux and gradient reconstruction for box-method simulations of multiphase, "
        "multicomponent flow in porous media"
    ),
    platforms=["Linux", "Windows", "Mac OS-X"],
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    zip_safe=False,
)

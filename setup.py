import sys, os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
import setuptools, rpgmvdec

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="rpgmvdec",
    version=rpgmvdec.__version__,
    description="RPG Maker MV/MZ Asset Restoration Utility",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "pycryptodome",
        "tqdm",
        "coloredlogs",
    ],
    extras_require={"gui": ["GooeyEx>=0.0.8"], "test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "rpgmvdec = rpgmvdec.__main__:__main__",
            "rpgmvdec-gui = rpgmvdec.__gui__:__main__",
        ],
    },
    python_requires=">=3.10",
)

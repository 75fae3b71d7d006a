from setuptools import setup, find_packages

def get_requirements():
    with open("requirements.txt") as f:
        return [
            line.strip()
            for line in f
            if line.strip() and not line.startswith(("#", "-"))
        ]

setup(
    name="svg-iconset",
    version="0.1.0",
    description="Build a normalized Iconify JSON icon set from a directory of SVG files",
    author="Boris Malashenko",
    author_email="btmalashenko@itmo.ru",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    entry_points={
        'console_scripts': [
            'build_icon_set = iconset.main:main',
        ],
    },
    install_requires=get_requirements(),
    extras_require={
        "test": ["pytest"],
    },
)

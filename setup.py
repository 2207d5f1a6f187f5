from setuptools import setup

setup(
    project_urls={
        "Documentation": "https://mentionkit.readthedocs.io/",
    },
)

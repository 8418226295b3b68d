"""
Setup configuration for the WA Storefront backend and Python client
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="wa-storefront",
    version="1.0.0",
    description="WhatsApp storefront backend with signed Cloudinary uploads and storage quota alerts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["storefront", "storefront.*", "storefront_client", "storefront_client.*"]),
    py_modules=["main", "create_api_key"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn[standard]>=0.27.0",
        "motor>=3.3.0",
        "pymongo>=4.6.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "cloudinary>=1.36.0",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "mongomock-motor>=0.0.29",
            "httpx>=0.26.0",
        ],
    },
    keywords="whatsapp storefront cloudinary fastapi mongodb",
)

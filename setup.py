"""Setup script for the StatusBot Alexa skill."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements, splitting test tooling into the dev extra
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
dev_requirements = []

if requirements_file.exists():
    content = requirements_file.read_text().strip()
    lines = content.split("\n")

    for line in lines:
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        if "pytest" in line:
            dev_requirements.append(line)
        else:
            requirements.append(line)

setup(
    name="statusbot",
    version="0.1.0",
    description="Alexa skill that sets your Slack status and snoozes notifications until a time",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="StatusBot Team",
    # Package configuration
    packages=find_packages(include=["statusbot_lite", "statusbot_lite.*"]),
    include_package_data=True,
    # Dependencies
    install_requires=requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Communications :: Chat",
        "Framework :: AsyncIO",
        "Framework :: aiohttp",
    ],
    keywords="alexa slack status do-not-disturb voice skill async",
    entry_points={
        "console_scripts": [
            "statusbot=statusbot_lite.__main__:main",
        ],
    },
    zip_safe=False,
)

from setuptools import setup, find_packages

setup(
    name="polybar-weather",
    version="1.0.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "httpx",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["polybar-weather=polybarweather.cli:main"],
    },
    description="OpenWeatherMap current conditions and forecast for the Polybar status bar.",
    include_package_data=True,
)

"""
Setup script for chat-insights package.
"""

from setuptools import setup, find_packages

setup(
    name="chat-insights",
    version="0.1.0",
    packages=find_packages(include=["chat_insights", "chat_insights.*"]),
    install_requires=[
        "google-cloud-aiplatform>=1.66.0",
        "pandas>=2.2.2",
        "pydantic>=2.9.2",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "chat-insights=chat_insights.main:run",
        ],
    },
    python_requires=">=3.10",
    description="Sales chat analytics: conversation classification, KPIs, filters and reports",
)

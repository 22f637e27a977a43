from setuptools import setup

setup(
    name="hostfetch",
    version="1.0",
    py_modules=[
        "main",
        "i18n",
        "fact_collector",
        "system_reader",
        "command_runner",
        "tool_detector",
    ],
    data_files=[("share/hostfetch/locales", ["locales/es.json"])],
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "rich",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "hostfetch=main:main",
        ],
    },
)

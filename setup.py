from setuptools import setup, find_packages

setup(
    name="path-tracer",
    version="1.0.0",
    description="Click-to-place waypoint editor that emits ros2 nav_msgs/Path publish commands",
    packages=find_packages(include=["tracer", "tracer.*"]),
    py_modules=["main", "doctor"],
    include_package_data=True,
    package_data={"": ["*.json"]},
    install_requires=[
        "pygame>=2.1.3",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["path-tracer=main:main"],
    },
    python_requires=">=3.8",
)

from setuptools import find_packages, setup

setup(
	name="geomopt",
	version="0.1.0",
	packages=find_packages(exclude=["tests", "tests.*"]),
	install_requires=[
		"numpy>=1.21.0",
		"scipy>=1.7.0",
	],
	extras_require={
		"dev": [
			"pytest>=7.0.0",
		],
	},
	entry_points={
		"console_scripts": [
			"geomopt=geomopt.cli:main",
		],
	},
	author="Justin Kirkland",
	description="Quasi-Newton (BFGS) geometry optimization driven by an electronic-structure solver",
	python_requires=">=3.8",
)

"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "typify" / "signature.md")

setuptools.setup(
	name='typify',
	version='0.1.0',
	packages=['typify'],
	package_data={
		'typify': ["signature.md", "signature.automaton"],
	},
	entry_points={
		'console_scripts': ["typify = typify.cmdline:main"],
	},
	license='MIT',
	description='Runtime type checking for Python callables, driven by compact textual signatures',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Quality Assurance",
		"Topic :: Software Development :: Testing",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)

"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='elmtypes',
	version='0.1.0',
	packages=['elmtypes'],
	package_data={
		'elmtypes': ["grammar.lark"],
	},
	entry_points={
		'console_scripts': ["elmtypes = elmtypes.cmdline:main"],
	},
	license='MIT',
	description='Normalizes the type declarations of an Elm module into a small, validated model for code generators',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Code Generators",
		"Topic :: Software Development :: Compilers",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"lark>=1.1",
	]
)

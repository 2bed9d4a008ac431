"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='lazybones',
	version='0.0.1',
	packages=['lazybones', ],
	entry_points={
		'console_scripts': ["lazybones = lazybones.cmdline:main"],
	},
	license='MIT',
	description='A cooperative call-by-need evaluator for a tiny untyped functional calculus',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)

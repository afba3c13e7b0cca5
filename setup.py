from os import path
from re import match, S
from setuptools import setup

with open(path.join(path.dirname(path.abspath(__file__)),
                    'mw_traverse', '__init__.py'), 'r') as f:
    contents = f.read()
    longdesc = match('^"""(.*?)"""', contents, S).group(1)
    version = match(r'[\s\S]*__version__[^\'"]+[\'"]([^\'"]+)[\'"]', contents).group(1)
    del contents

setup(
    name="mw-traverse",
    version=version,
    description="A MediaWiki API client that can walk category trees.",
    long_description=longdesc,
    long_description_content_type="text/x-rst",
    url="https://github.com/Kenny2github/mw-api-client",
    license="MIT",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Wiki',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='mediawiki api requests category',
    packages=["mw_traverse", "mw_traverse.tests"],
    install_requires=['requests'],
    python_requires='>=3.6',
    extras_require={
        'test': ['pytest'],
    },
)

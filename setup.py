import os

from setuptools import setup

rootpath = os.path.abspath(os.path.dirname(__file__))


# Extract version
def extract_version(module='beeweb'):
    version = None
    fname = os.path.join(rootpath, module, 'app.py')
    with open(fname) as f:
        for line in f:
            if line.startswith('__version__'):
                _, version = line.split('=')
                version = version.strip()[1:-1]  # Remove quotation characters.
                break
    return version


deps = [
    "werkzeug>=2.2.0",
]

setup(
    name='beeweb',
    version=extract_version(),
    packages=[
        'beeweb',
    ],
    license='MIT',
    description='A tiny WSGI web framework built around a per-request context',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Internet",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Application Frameworks"
    ],
    python_requires=">=3.7",
    install_requires=deps,
    extras_require={
        "test": ["pytest"],
    }
)

from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*\S+)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='reqparam',
    version=file_getVersion('reqparam/__init__.py'),
    description='Resolve declared request parameters from prioritized token sources',
    packages=find_namespace_packages(include=['reqparam', 'reqparam.*']),
    python_requires='>=3.11',
    install_requires=[
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
        'loguru',
    ],
    license='MIT',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries'
    ],
    extras_require={
        'none': [],
        'dev': [
            'pytest>=7.1'
        ]
    }
)

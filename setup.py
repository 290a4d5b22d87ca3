from setuptools import setup, find_packages
import re

# Read version from retirecalc/__init__.py
with open('retirecalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='retire-calc',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'retirecalc': ['tax-rules/*.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'retire-calc=retirecalc.cli.__main__:main',
            'retire-calc-mcp=retirecalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='401(k) vs. taxable brokerage retirement contribution comparison tools.',
    python_requires='>=3.10',
)

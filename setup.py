# setup.py
from setuptools import setup, find_packages, Extension
from Cython.Build import cythonize
import os

# Full path to the engine source; it is plain Python, compiling it only speeds it up
engine_path = os.path.join("calc", "evaluation", "engine.py")

ext_modules = cythonize(
    Extension(
        name="calc.evaluation.engine",  # module path for import
        sources=[engine_path],
    ),
    compiler_directives={
        'language_level': "3",
        "boundscheck": False,
        "wraparound": False,
        "annotation_typing": False,
    },
)
# Without a C compiler the pure-Python engine is used as is
for ext in ext_modules:
    ext.optional = True

setup(
    name="calc",
    version="0.1.0",
    description="Infix expression evaluator with a reusable formula compiler",
    packages=find_packages(include=["calc", "calc.*"]),
    python_requires=">=3.10",
    ext_modules=ext_modules,
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["calc = calc.cli:main"],
    },
    zip_safe=False,
)

from setuptools import setup, Extension, find_packages
from Cython.Build import cythonize

# Define the Cython extensions
extensions = [
    Extension(
        "kmer_count.counting",
        ["src/kmer_count/counting.py"],
        include_dirs=[],
        language="c",
    ),
]

setup(
    name="kmer-count",
    version="0.1.0",
    description="Count the frequency of every k-mer in FASTA records",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["kmer-count=kmer_count.__main__:main"],
    },
    ext_modules=cythonize(
        extensions,
        compiler_directives={
            'language_level': 3,
            'boundscheck': True,  # Enable bounds checking for safety
            'wraparound': False,
            'cdivision': True,
            'nonecheck': False,
        }
    ),
    zip_safe=False,
)

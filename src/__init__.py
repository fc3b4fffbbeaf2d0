"""
Kitchen Chemical Matcher - Source Package

Main modules:
- catalog: Chemical records, catalog file loading and bulk import
- normalization: Task text tokenization
- matching: Chemical-to-task matching engine and safety penalty model
- schedule: Cleaning schedule model and chemical auto-association
- utils: Configuration management
"""

__version__ = "1.0.0"
__author__ = "Kiefer"

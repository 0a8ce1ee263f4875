# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

project = 'torch-bicgstab'
copyright = '2024, walker chi'
author = 'walker chi'
release = '0.1.0'

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]
import os
import sys
sys.path.insert(0, os.path.abspath('../../'))  # repository root, for torch_bicgstab

# numpydoc-style docstrings throughout torch_bicgstab
napoleon_google_docstring = False
napoleon_numpy_docstring = True
autodoc_mock_imports = ['torch']
autodoc_member_order = 'bysource'
exclude_patterns = []


# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output
html_theme = 'furo'

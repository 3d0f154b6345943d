"""Eyeglass test suite.

- test_options.py: Eyeglass options and the deprecated interface
- test_assemble.py: options assembly, legacy layout migration
- test_paths.py: include path resolution and SASS_PATH
- test_versions.py: semantic versions, deprecation thresholds, ranges
- test_deprecation.py: deprecation records and sinks
"""

"""
Tests for BlueprintBuilder.

Test organization:
- test_build.py: single builds, defaults, custom instantiation
- test_build_many.py: lazy batches and cycling
- test_self_blueprint.py: builders that are their own blueprint
- test_clone.py: copying configured builders
"""

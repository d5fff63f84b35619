"""setup-pewbuild: install a pewbuild release into the CI tool cache."""

__version__ = "0.1.0"

"""Provision Azure storage as a Terraform remote state backend."""

__version__ = "0.1.0"

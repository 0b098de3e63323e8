"""Packaged resources for workflowkit."""

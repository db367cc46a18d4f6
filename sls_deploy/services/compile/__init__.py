"""Template compilation.

Pure, synchronous helpers that turn a ``ServiceManifest`` into CloudFormation resources and
outputs. Nothing in this package talks to AWS.
"""

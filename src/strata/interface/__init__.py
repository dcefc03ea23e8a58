"""
==========
Interfaces
==========

Command line access to ``strata`` configuration.

"""

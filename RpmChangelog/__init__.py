import tempfile

from . import ConfigParser

config = ConfigParser.Config()
tempfile.tempdir = config.get("global", "tempdir", None) or None # when ""
del ConfigParser

def set_verbose(*a, **kw):
    config.set("global", "verbose", "yes")

class Error(Exception): pass

class SilentError(Error): pass

class RepositoryError(Error): pass

class WorkspaceError(Error): pass

class ResolverError(Error): pass

# vim:et:ts=4:sw=4

from RpmChangelog import Error, WorkspaceError, config
import tempfile
import shutil
import os

# rpm spec directive pulling in other files of the package
INCLUDE_MARKER = b"%include"

class Workspace(object):
    """Disposable directory holding the sources of one commit.

    topdir is the private temporary directory owning everything, path is
    the source directory handed to rpm and specpath the spec file in it.
    Leaving the with block removes topdir.
    """
    def __init__(self, topdir, path, specpath, fullcheckout=False):
        self.topdir = topdir
        self.path = path
        self.specpath = specpath
        self.fullcheckout = fullcheckout

    def cleanup(self):
        if os.path.isdir(self.topdir):
            shutil.rmtree(self.topdir)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.cleanup()
        return False

    def __repr__(self):
        return "<Workspace %s full=%s>" % (self.topdir, self.fullcheckout)

def include_marker():
    marker = config.get("workspace", "include-marker")
    if marker:
        return marker.encode("utf-8")
    return INCLUDE_MARKER

def needs_fullcheckout(content):
    if config.getbool("workspace", "full-checkout", 0):
        return True
    return include_marker() in content

def materialize(repo, commit, specname):
    """Build a Workspace able to evaluate specname as of commit.

    Returns None when the commit tree has no such file. Spec files
    including other files get the whole tree checked out, others only get
    the spec file itself written.
    """
    entry = repo.tree_entry(commit.tree, specname)
    if entry is None or entry[1] != "blob":
        return None
    content = repo.cat_blob(entry[2])
    fullcheckout = needs_fullcheckout(content)
    try:
        topdir = tempfile.mkdtemp(prefix="git-rpm-changelog-")
    except OSError as e:
        raise WorkspaceError("cannot create temporary directory: %s" % e)
    path = os.path.join(topdir, "sources")
    specpath = os.path.join(path, specname)
    try:
        os.mkdir(path)
        if fullcheckout:
            repo.checkout(commit.tree, path, os.path.join(topdir, "index"))
        else:
            with open(specpath, "wb") as f:
                f.write(content)
    except OSError as e:
        shutil.rmtree(topdir, ignore_errors=True)
        raise WorkspaceError("cannot write %s: %s" % (specpath, e))
    except Error:
        shutil.rmtree(topdir, ignore_errors=True)
        raise
    return Workspace(topdir, path, specpath, fullcheckout)

# vim:et:ts=4:sw=4

from RpmChangelog import RepositoryError, WorkspaceError, config
from RpmChangelog.util import execcmd, CommandError
import os

# tree, author name, author email, raw author date, summary
COMMIT_FORMAT = "%T%x00%an%x00%ae%x00%ad%x00%s"

class Commit(object):
    def __init__(self, oid, tree, author_name, author_email, author_time,
                 author_offset, summary):
        self.oid = oid
        self.tree = tree
        self.author_name = author_name
        self.author_email = author_email
        self.author_time = author_time
        # minutes east of UTC, as recorded by the author
        self.author_offset = author_offset
        self.summary = summary

    def __repr__(self):
        return "<Commit %s author=%r time=%d offset=%d>" % \
                (self.oid[:12], self.author_name, self.author_time,
                 self.author_offset)

def parse_offset(rawoffset):
    """Convert a git "+hhmm"/"-hhmm" offset into minutes east of UTC"""
    sign = -1 if rawoffset.startswith("-") else 1
    digits = rawoffset.lstrip("+-")
    return sign * (int(digits[:-2]) * 60 + int(digits[-2:]))

def parse_commit(oid, output):
    fields = output.rstrip("\n").split("\0")
    if len(fields) != 5:
        raise RepositoryError("unexpected output while reading commit %s" % oid)
    tree, name, email, rawdate, summary = fields
    seconds, rawoffset = rawdate.split()
    return Commit(oid, tree, name or None, email or None, int(seconds),
                  parse_offset(rawoffset), summary)

class GIT(object):
    """Read-only access to a git repository.

    Every instance is an independent handle: it never changes the process
    working directory nor the repository's index, HEAD or work tree, so
    several of them may be used concurrently on the same repository.
    """
    def __init__(self, path):
        self.vcs_command = config.get("global", "git-command", "git").split()
        self._path = os.path.abspath(path)
        self.workdir = self._open()
        # run from the top so tree paths are relative to the root
        self._path = self.workdir

    def _execVcs(self, *args, **kwargs):
        cmd = self.vcs_command + ["-C", self._path] + list(args)
        return execcmd(*cmd, **kwargs)

    def _open(self):
        if not os.path.isdir(self._path):
            raise RepositoryError("no such directory: %s" % self._path)
        try:
            status, output = self._execVcs("rev-parse", "--show-toplevel")
        except CommandError as e:
            raise RepositoryError("cannot open repository at %s: %s" %
                    (self._path, e.output.strip()))
        return output.strip()

    @property
    def path(self):
        return self._path

    def spec_name(self):
        return os.path.basename(self.workdir) + ".spec"

    def resolve(self, rev="HEAD"):
        if rev.startswith("-"):
            raise RepositoryError("invalid revision: %s" % rev)
        cmd = ["rev-parse", "--verify", "--quiet", rev + "^{commit}"]
        try:
            status, output = self._execVcs(*cmd, noerror=True)
        except CommandError as e:
            raise RepositoryError(str(e))
        if status != 0 or not output.strip():
            raise RepositoryError("cannot resolve revision %s in %s" %
                    (rev, self.workdir))
        return output.strip()

    def revwalk(self, rev="HEAD"):
        """Commit ids reachable from rev, descendants before ancestors"""
        oid = self.resolve(rev)
        try:
            status, output = self._execVcs("rev-list", "--topo-order", oid)
        except CommandError as e:
            raise RepositoryError(str(e))
        return output.split()

    def commit(self, oid):
        cmd = ["show", "-s", "--no-show-signature", "--date=raw",
               "--format=" + COMMIT_FORMAT, oid]
        try:
            status, output = self._execVcs(*cmd)
        except CommandError as e:
            raise RepositoryError("cannot read commit %s: %s" %
                    (oid, e.output.strip()))
        return parse_commit(oid, output)

    def tree_entry(self, treeish, name):
        """Return (mode, type, id) of the top level entry name, or None"""
        try:
            status, output = self._execVcs("ls-tree", "--full-tree", "-z",
                                           treeish)
        except CommandError as e:
            raise RepositoryError("cannot list tree %s: %s" %
                    (treeish, e.output.strip()))
        for line in output.split("\0"):
            if not line:
                continue
            info, entryname = line.split("\t", 1)
            if entryname == name:
                mode, kind, oid = info.split()
                return mode, kind, oid
        return None

    def cat_blob(self, oid):
        try:
            status, output = self._execVcs("cat-file", "blob", oid,
                                           binary=True)
        except CommandError as e:
            raise RepositoryError("cannot read blob %s: %s" %
                    (oid, e.output.strip()))
        return output

    def checkout(self, treeish, targetdir, indexfile):
        """Write the whole tree of treeish into targetdir.

        indexfile is a private, not yet existing, index used for the
        operation; the repository index is left untouched.
        """
        env = {"GIT_INDEX_FILE": os.path.abspath(indexfile)}
        worktree = "--work-tree=" + os.path.abspath(targetdir)
        try:
            self._execVcs(worktree, "read-tree", treeish, env=env)
            self._execVcs(worktree, "checkout-index", "--all", "--force",
                          env=env)
        except CommandError as e:
            raise WorkspaceError("cannot checkout %s into %s: %s" %
                    (treeish, targetdir, e.output.strip()))

# vim:et:ts=4:sw=4

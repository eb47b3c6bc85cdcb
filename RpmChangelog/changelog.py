#!/usr/bin/python3
#
# Builds a rpm %changelog out of the git history of a package, using
# rpmspec to find the version-release of the package at every commit.
#
from RpmChangelog import Error, config
from RpmChangelog.git import GIT
from RpmChangelog.log import format_entry
from RpmChangelog.rpmspec import query_version
from RpmChangelog.workspace import materialize

from concurrent import futures
import progressbar
import sys
import os

def walk_revisions(repo, rev="HEAD", size=None):
    revisions = repo.revwalk(rev)
    if size is not None:
        revisions = revisions[:size]
    return revisions

def process_revision(path, oid, specname, resolver=query_version):
    """Changelog entry of one commit, or None when it has no spec file.

    Returns (entry, error), error being the diagnostic of a failed version
    query. A private repository handle and workspace are used, so it can
    run concurrently with other calls.
    """
    repo = GIT(path)
    commit = repo.commit(oid)
    workspace = materialize(repo, commit, specname)
    if workspace is None:
        return None
    with workspace:
        version, error = resolver(workspace)
    return format_entry(commit, version), error

def default_jobs():
    jobs = config.getint("global", "jobs", None)
    if jobs is None:
        return os.cpu_count() or 1
    if jobs < 1:
        raise Error("invalid number of jobs in configuration: %d" % jobs)
    return jobs

def _progressbar(enabled, total):
    if enabled is None:
        enabled = config.getbool("global", "progress", 0)
    if not enabled or not total:
        return None
    bar = progressbar.ProgressBar(max_value=total, fd=sys.stderr)
    bar.start()
    return bar

def run_serial(path, revisions, specname, resolver, bar=None):
    results = []
    for i, oid in enumerate(revisions):
        results.append(process_revision(path, oid, specname, resolver))
        if bar is not None:
            bar.update(i + 1)
    return results

def run_parallel(path, revisions, specname, resolver, jobs, bar=None):
    results = [None] * len(revisions)
    done = 0
    with futures.ThreadPoolExecutor(max_workers=jobs) as executor:
        pending = {}
        for i, oid in enumerate(revisions):
            future = executor.submit(process_revision, path, oid, specname,
                                     resolver)
            pending[future] = i
        try:
            for future in futures.as_completed(pending):
                results[pending[future]] = future.result()
                done += 1
                if bar is not None:
                    bar.update(done)
        except BaseException:
            # running tasks are left to finish, their results are dropped
            for future in pending:
                future.cancel()
            raise
    return results

def get_changelog(path, rev="HEAD", specname=None, jobs=None, size=None,
                  resolver=query_version, progress=None):
    """Return the list of changelog entries for the repository at path.

    Entries follow the topological order of the history starting at rev,
    whatever the order in which the commits were processed.
    """
    repo = GIT(path)
    specname = specname or repo.spec_name()
    revisions = walk_revisions(repo, rev, size)
    if jobs is None:
        jobs = default_jobs()
    elif jobs < 1:
        raise Error("invalid number of jobs: %d" % jobs)
    bar = _progressbar(progress, len(revisions))
    if jobs == 1 or len(revisions) < 2:
        results = run_serial(repo.path, revisions, specname, resolver, bar)
    else:
        results = run_parallel(repo.path, revisions, specname, resolver,
                               jobs, bar)
    if bar is not None:
        bar.finish()
    entries = []
    for result in results:
        if result is None:
            continue
        entry, error = result
        if error:
            sys.stderr.write(error if error.endswith("\n") else error + "\n")
        entries.append(entry)
    return entries

def dump_changelog(entries, output=None):
    output = output or sys.stdout
    for entry in entries:
        output.write("%s\n\n" % entry)

# vim:et:ts=4:sw=4

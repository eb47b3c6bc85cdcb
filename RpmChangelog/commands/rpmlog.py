#!/usr/bin/python3
#
# Prints the rpm %changelog of a package kept in a git repository, one
# entry per commit carrying the package .spec file.
#
from RpmChangelog import Error, set_verbose
from RpmChangelog.command import *
from RpmChangelog.changelog import get_changelog, dump_changelog

HELP = """\
Usage: git-rpm-changelog [OPTIONS] PATH

Prints the RPM changelog of the package kept in the git repository PATH,
using the PATH directory name followed by .spec as the spec file.

Options:
    -r REV   Collect logs from revision REV instead of HEAD
    -n NUM   Only look at the NUM latest revisions
    -s NAME  Use NAME as the spec file name
    -j NUM   Process NUM revisions in parallel (1 disables it)
    -P       Show a progress bar on stderr
    -v       Show the commands being run
    -h       Show this message

Examples:
    git-rpm-changelog python
    git-rpm-changelog -j 1 -n 10 ~/packages/python
"""

def parse_options():
    parser = OptionParser(help=HELP)
    parser.add_option("-r", dest="rev", default="HEAD")
    parser.add_option("-n", dest="size", type="int")
    parser.add_option("-s", dest="specname")
    parser.add_option("-j", dest="jobs", type="int")
    parser.add_option("-P", dest="progress", default=None,
            action="store_true")
    parser.add_option("-v", action="callback", callback=set_verbose)
    opts, args = parser.parse_args()
    if len(args) != 1:
        raise Error("invalid arguments")
    if opts.jobs is not None and opts.jobs < 1:
        raise Error("invalid number of jobs: %d" % opts.jobs)
    if opts.size is not None and opts.size < 0:
        raise Error("invalid number of revisions: %d" % opts.size)
    opts.path = args[0]
    return opts

def rpmlog(path, rev="HEAD", size=None, specname=None, jobs=None,
           progress=None):
    entries = get_changelog(path, rev=rev, specname=specname, jobs=jobs,
                            size=size, progress=progress)
    dump_changelog(entries)

def main():
    do_command(parse_options, rpmlog)

# vim:sw=4:ts=4:et

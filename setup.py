#!/usr/bin/python3
from setuptools import setup
import sys
import re

verpat = re.compile("VERSION *= *\"(.*)\"")
data = open("git-rpm-changelog").read()
m = verpat.search(data)
if not m:
    sys.exit("error: can't find VERSION")
VERSION = m.group(1)

setup(name="git-rpm-changelog",
      version = VERSION,
      description = "Generate a RPM changelog out of a package git history",
      license = "GPL",
      long_description = """Walks the git history of a package and prints a RPM
%changelog with one entry per commit, versioned with rpmspec.""",
      packages = ["RpmChangelog", "RpmChangelog.commands"],
      scripts = ["git-rpm-changelog"],
      python_requires = ">=3.6",
      install_requires=['progressbar2'],
      extras_require={'test': ['pytest']},
      )

# vim:ts=4:sw=4:et

from RpmChangelog import ResolverError, config
from RpmChangelog.util import execcmd, CommandError

QUERYFORMAT = "%|EPOCH?{%{EPOCH}:}|%{VERSION}-%{RELEASE}"

def rpm_macros_defs(macros):
    args = []
    for name, value in macros:
        args.extend(("--define", "%s %s" % (name, value)))
    return args

def query_args(workspace):
    rpmspec = config.get("helper", "rpmspec", "rpmspec")
    args = [rpmspec, "--srpm", "--query", "--queryformat", QUERYFORMAT,
            "--undefine", "dist",
            "--define", "_sourcedir %s" % workspace.path]
    args.extend(rpm_macros_defs(config.walk("macros")))
    args.append(workspace.specpath)
    return args

def query_version(workspace):
    """Ask rpmspec for the [epoch:]version-release of the workspace spec.

    Returns (version, None) on success and (None, error) when rpmspec
    fails, error being what it wrote on stderr. Not being able to run
    rpmspec at all raises ResolverError.
    """
    args = query_args(workspace)
    try:
        status, output, error = execcmd(*args, noerror=True, geterr=True)
    except CommandError as e:
        raise ResolverError(str(e))
    if status != 0:
        return None, error
    return output.strip(), None

# vim:et:ts=4:sw=4

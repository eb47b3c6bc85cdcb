from RpmChangelog import Error, config

import subprocess
import shlex
import sys
import os

class CommandError(Error):
    """A child process failed to start or exited with a non-zero status.

    status is None when the command could not be executed at all.
    """
    def __init__(self, cmdstr, status, output):
        self.cmdstr = cmdstr
        self.status = status
        self.output = output
        if status is None:
            msg = "cannot execute %s: %s" % (cmdstr, output)
        else:
            msg = "command failed: %s\n%s" % (cmdstr, output.rstrip("\n"))
        Error.__init__(self, msg)

def cmdline(cmd):
    return " ".join(shlex.quote(arg) for arg in cmd)

def execcmd(*cmd, **kwargs):
    """Run cmd (no shell involved) and return (status, output).

    Keyword arguments:
        cwd      directory to run the command from
        env      extra environment variables
        noerror  do not raise CommandError on a non-zero exit status
        binary   return the standard output as bytes
        geterr   return (status, output, error) with the standard error
                 kept apart from the output
    """
    cmdstr = cmdline(cmd)
    verbose = config.getbool("global", "verbose", 0)
    env = dict(os.environ)
    env.update({"LANG": "C", "LANGUAGE": "C", "LC_ALL": "C"})
    if kwargs.get("env"):
        env.update(kwargs["env"])
    if verbose:
        sys.stderr.write(cmdstr + "\n")
    try:
        pipe = subprocess.Popen(cmd, cwd=kwargs.get("cwd"), env=env,
                stdin=subprocess.DEVNULL, stdout=subprocess.PIPE,
                stderr=subprocess.PIPE)
    except OSError as e:
        raise CommandError(cmdstr, None, e.strerror or str(e))
    rawout, rawerr = pipe.communicate()
    status = pipe.returncode
    error = rawerr.decode("utf-8", "replace")
    if kwargs.get("binary"):
        output = rawout
    else:
        output = rawout.decode("utf-8", "replace")
    if status != 0 and not kwargs.get("noerror"):
        raise CommandError(cmdstr, status, error)
    if kwargs.get("geterr"):
        return status, output, error
    return status, output

# vim:et:ts=4:sw=4

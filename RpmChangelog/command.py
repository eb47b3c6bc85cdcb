from RpmChangelog import SilentError, Error
import optparse
import sys
import os

__all__ = ["OptionParser", "do_command"]

class OptionParser(optparse.OptionParser):

    def __init__(self, usage=None, help=None, **kwargs):
        optparse.OptionParser.__init__(self, usage, **kwargs)
        self._overload_help = help

    def format_help(self, formatter=None):
        if self._overload_help:
            return self._overload_help
        return optparse.OptionParser.format_help(self, formatter)

    def error(self, msg):
        raise Error(msg)

def do_command(parse_options_func, main_func):
    try:
        opt = parse_options_func()
        main_func(**opt.__dict__)
        sys.stdout.flush()
    except SilentError:
        sys.exit(1)
    except Error as e:
        sys.stderr.write("error: %s\n" % str(e))
        sys.exit(1)
    except BrokenPipeError:
        # output closed early (| head), don't complain again at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(1)
    except KeyboardInterrupt:
        sys.stderr.write("interrupted\n")
        sys.stderr.flush()
        sys.exit(1)

# vim:et:ts=4:sw=4

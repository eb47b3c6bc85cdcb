"""
A small ini parser that keeps the order in which options and sections
are read, and allows multiple options with the same key (needed by the
[macros] section, where the order of definitions matters).
"""
import os
import re

__all__ = ["Error", "NoSectionError", "NoOptionError", "ParsingError",
           "MissingSectionHeaderError", "ConfigParser", "Config"]

DEFAULTSECT = "DEFAULT"

class Error(Exception):
    def __init__(self, msg=''):
        self._msg = msg
        Exception.__init__(self, msg)
    def __repr__(self):
        return self._msg
    __str__ = __repr__

class NoSectionError(Error):
    def __init__(self, section):
        Error.__init__(self, 'No section: %s' % section)
        self.section = section

class NoOptionError(Error):
    def __init__(self, option, section):
        Error.__init__(self, "No option `%s' in section: %s" %
                       (option, section))
        self.option = option
        self.section = section

class ParsingError(Error):
    def __init__(self, filename):
        Error.__init__(self, 'File contains parsing errors: %s' % filename)
        self.filename = filename
        self.errors = []

    def append(self, lineno, line):
        self.errors.append((lineno, line))
        self._msg = self._msg + '\n\t[line %2d]: %r' % (lineno, line)

class MissingSectionHeaderError(ParsingError):
    def __init__(self, filename, lineno, line):
        Error.__init__(
            self,
            'File contains no section headers.\nfile: %s, line: %d\n%r' %
            (filename, lineno, line))
        self.filename = filename
        self.lineno = lineno
        self.line = line

class ConfigParser:
    SECTCRE = re.compile(r'\[(?P<header>[^]]+)\]')
    OPTCRE = re.compile(r'(?P<option>\S+)\s*(?P<vi>[:=])\s*(?P<value>.*)$')

    def __init__(self, defaults=None):
        # Options are stored in _sections_list like this:
        # [(sectname, [[optname, optval], ...]), ...]
        self._sections_list = []
        self._sections_dict = {}
        self._defaults = defaults or {}

    def options(self, section):
        try:
            opts = list(self._sections_dict[section])
        except KeyError:
            raise NoSectionError(section)
        return list(self._defaults) + opts

    def read(self, filenames):
        if isinstance(filenames, str):
            filenames = [filenames]
        for filename in filenames:
            try:
                fp = open(filename)
            except OSError:
                continue
            with fp:
                self._read(fp, filename)

    def readfp(self, fp, filename=None):
        if filename is None:
            filename = getattr(fp, "name", "<???>")
        self._read(fp, filename)

    def _section(self, section):
        if section in self._sections_dict:
            sectdict = self._sections_dict[section]
            sectlist = []
            self._sections_list.append((section, sectlist))
        elif section == DEFAULTSECT:
            sectdict = self._defaults
            sectlist = None
        else:
            sectdict = {}
            self._sections_dict[section] = sectdict
            sectlist = []
            self._sections_list.append((section, sectlist))
        return sectdict, sectlist

    def set(self, section, option, value):
        sectdict, sectlist = self._section(section)
        sectdict[option] = value
        if sectlist is not None:
            sectlist.append([option, value])

    def get(self, section, option):
        d = self._defaults.copy()
        try:
            d.update(self._sections_dict[section])
        except KeyError:
            if section != DEFAULTSECT:
                raise NoSectionError(section)
        try:
            return d[option]
        except KeyError:
            raise NoOptionError(option, section)

    def walk(self, section, option=None):
        if section not in self._sections_dict:
            if section == DEFAULTSECT:
                return
            raise NoSectionError(section)
        for sectname, options in self._sections_list:
            if sectname == section:
                for optname, value in options:
                    if not option or optname == option:
                        yield (optname, value)

    def _read(self, fp, fpname):
        cursectdict = None
        cursectlist = None
        optname = None
        e = None
        for lineno, line in enumerate(fp, 1):
            # comment or blank line?
            if line.strip() == '' or line[0] in '#;':
                continue
            # continuation line?
            if line[0] in ' \t' and cursectdict is not None and optname:
                value = line.strip()
                if value:
                    cursectdict[optname] = "%s\n%s" % (cursectdict[optname],
                                                       value)
                    if cursectlist:
                        cursectlist[-1][1] = "%s\n%s" % (cursectlist[-1][1],
                                                         value)
                continue
            mo = self.SECTCRE.match(line)
            if mo:
                cursectdict, cursectlist = self._section(mo.group('header'))
                # So sections can't start with a continuation line
                optname = None
            elif cursectdict is None:
                raise MissingSectionHeaderError(fpname, lineno, line)
            else:
                mo = self.OPTCRE.match(line)
                if mo:
                    optname, vi, optval = mo.group('option', 'vi', 'value')
                    if ';' in optval:
                        # ';' is a comment delimiter only if it follows
                        # a spacing character
                        pos = optval.find(';')
                        if pos and optval[pos-1].isspace():
                            optval = optval[:pos]
                    optval = optval.strip()
                    if optval == '""':
                        optval = ''
                    cursectdict[optname] = optval
                    if cursectlist is not None:
                        cursectlist.append([optname, optval])
                else:
                    # keep going, all bogus lines are reported at the end
                    if not e:
                        e = ParsingError(fpname)
                    e.append(lineno, line)
        if e:
            raise e


BOOLEAN_STATES = {'1': 1, 'yes': 1, 'true': 1, 'on': 1,
                  '0': 0, 'no': 0, 'false': 0, 'off': 0}

class Config:
    def __init__(self, conffiles=None):
        self._config = ConfigParser()
        if conffiles is None:
            conffiles = ["/etc/git-rpm-changelog.conf"]
            envconf = os.environ.get("GIT_RPM_CHANGELOG_CONF")
            if envconf:
                conffiles.append(envconf)
            conffiles.append(os.path.expanduser("~/.git-rpm-changelog/config"))
        for file in conffiles:
            if os.path.isfile(file):
                self._config.read(file)

    def options(self, section):
        try:
            return self._config.options(section)
        except Error:
            return []

    def set(self, section, option, value):
        return self._config.set(section, option, value)

    def walk(self, section):
        try:
            return list(self._config.walk(section))
        except Error:
            return []

    def get(self, section, option, default=None):
        try:
            return self._config.get(section, option)
        except Error:
            return default

    def getint(self, section, option, default=None):
        ret = self.get(section, option)
        if ret is None or ret == "":
            return default
        try:
            return int(ret)
        except ValueError:
            return default

    def getbool(self, section, option, default=None):
        ret = self.get(section, option)
        if isinstance(ret, str) and ret.lower() in BOOLEAN_STATES:
            return BOOLEAN_STATES[ret.lower()]
        return default

# vim:ts=4:sw=4:et

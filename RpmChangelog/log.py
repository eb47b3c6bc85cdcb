from RpmChangelog import config

import datetime

# rpm only understands english day and month names, don't depend on the
# locale for them
DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DEFAULT_NAME = "Nobody"
DEFAULT_EMAIL = "nobody@fedoraproject.org"

class ChangelogEntry(object):
    def __init__(self, header, body):
        self.header = header
        self.body = body

    def __str__(self):
        return "%s\n%s" % (self.header, self.body)

    def __eq__(self, other):
        return (isinstance(other, ChangelogEntry) and
                (self.header, self.body) == (other.header, other.body))

    def __repr__(self):
        return "<ChangelogEntry %r>" % self.header

def author_date(seconds, offset):
    """Datetime of seconds in the author's own timezone (offset minutes)"""
    tz = datetime.timezone(datetime.timedelta(minutes=offset))
    return datetime.datetime.fromtimestamp(seconds, tz)

def format_date(seconds, offset):
    date = author_date(seconds, offset)
    return "%s %s %s %s" % (DAYS[date.weekday()], MONTHS[date.month - 1],
                            date.strftime("%d %H:%M:%S %z"), date.year)

def get_author_name(commit):
    name = commit.author_name or config.get("log", "default-name",
            DEFAULT_NAME)
    email = commit.author_email or config.get("log", "default-email",
            DEFAULT_EMAIL)
    return name, email

def format_entry(commit, version=None):
    name, email = get_author_name(commit)
    header = "* %s %s <%s>" % (format_date(commit.author_time,
                                           commit.author_offset), name, email)
    if version is not None:
        header += " - %s" % version
    return ChangelogEntry(header, "- %s" % commit.summary)

# vim:et:ts=4:sw=4

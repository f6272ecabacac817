
from functools import lru_cache
from threading import Lock
from re import compile, escape, DOTALL


# convert the token patterns used by moment.js (and so by most locale-aware
# libraries) into the directives understood by strptime.  so
#   YYYY-MM-DD HH:mm:ss.SSS Z
# becomes
#   %Y-%m-%d %H:%M:%S.%f %z
# text inside [...] is copied literally, as is anything that is not a token.
# strptime is lenient about leading zeroes, so M and MM (etc) are the same.

ISO_SUBSTITUTIONS = {
    'YYYY': '%Y',
    'YY': '%y',
    'MMMM': '%B',
    'MMM': '%b',
    'MM': '%m',
    'M': '%m',
    'DDDD': '%j',
    'DD': '%d',
    'D': '%d',
    'dddd': '%A',
    'ddd': '%a',
    'HH': '%H',
    'H': '%H',
    'hh': '%I',
    'h': '%I',
    'mm': '%M',
    'm': '%M',
    'ss': '%S',
    's': '%S',
    'A': '%p',
    'a': '%p',
    'ZZ': '%z',
    'Z': '%z',
}

# longest first, so that YYYY is not read as YY YY
TOKEN = compile(r'\[([^\]]*)\]|(S{1,6})|(%s)|(.)' %
                '|'.join(map(escape, sorted(ISO_SUBSTITUTIONS, key=len, reverse=True))),
                DOTALL)

WORD = compile(r'[^\W\d_]+')


def tokenizer(pattern):
    '''
    :param pattern: A moment-style pattern.
    :return: A sequence of (is_literal, text) pairs.
    '''
    for match in TOKEN.finditer(pattern):
        literal, fraction, token, other = match.groups()
        if literal is not None:
            yield True, literal
        elif fraction is not None:
            yield False, '%f'
        elif token is not None:
            yield False, ISO_SUBSTITUTIONS[token]
        else:
            yield True, other


def _to_strptime(pattern):
    if not isinstance(pattern, str):
        raise TypeError('pattern must be str, not {0}'.format(type(pattern)))
    return ''.join(text.replace('%', '%%') if literal else text
                   for literal, text in tokenizer(pattern))


CACHE_MAX_SIZE = 100
_CACHE_LOCK = Lock()
_CACHED_STRPTIME = lru_cache(maxsize=CACHE_MAX_SIZE)(_to_strptime)

def to_strptime(pattern):
    with _CACHE_LOCK:
        return _CACHED_STRPTIME(pattern)


def translate(text, translator=None):
    '''
    Rewrite the words in `text` (typically localized month or day names)
    so that strptime can read them.

    :param text: The text to rewrite.
    :param translator: `None` (no change), a callable taking and returning a
                       word, or a mapping from words to replacements (keys
                       are matched ignoring case).
    :return: The rewritten text.
    '''
    if translator is None:
        return text
    if callable(translator):
        lookup = translator
    else:
        lowered = dict((key.lower(), value) for (key, value) in translator.items())
        def lookup(word):
            return lowered.get(word.lower(), word)
    return WORD.sub(lambda match: lookup(match.group(0)), text)

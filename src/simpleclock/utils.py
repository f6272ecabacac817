

class DebugLog:
    '''
    Base class supporting a simple log to stdout for debugging.  The log is
    available from both instance and class methods.
    '''

    @classmethod
    def _get_log(cls, debug):
        '''
        :param debug: True to enable logging.
        :return: A logger that will print to stdout if `debug` is `True`
        '''
        return cls._log if debug else cls._drop

    @classmethod
    def _log(cls, template, *args, **kargs):
        '''
        A logger that prints to stdout.

        :param template: A string that can contain embedded {0}-style
                         formatting.
        :param args: Format arguments.
        :param kargs: Named format arguments.
        '''
        print('%s: %s' % (cls.__name__, template.format(*args, **kargs)))

    @staticmethod
    def _drop(template, *args, **kargs):
        '''
        A null logger that discards its arguments.
        '''
        pass


class SimpleClockError(Exception):

    def __init__(self, template='', *args, **kargs):
        '''
        :param template: A message that can contain {0}-style formatting.
        :param args: Format arguments.
        :param kargs: Named format arguments.
        :return: A new instance of the exception.
        '''
        super().__init__(template.format(*args, **kargs))


def set_kargs_only(**kargs):
    return dict((key, value) for (key, value) in kargs.items() if value is not None)

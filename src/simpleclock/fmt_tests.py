
from unittest import TestCase
from simpleclock.fmt import to_strptime, _to_strptime, tokenizer, translate


class PatternTest(TestCase):

    def assert_pattern(self, target, pattern):
        result = to_strptime(pattern)
        assert target == result, result

    def test_dates(self):
        self.assert_pattern('%Y-%m-%d', 'YYYY-MM-DD')
        self.assert_pattern('%d/%m/%y', 'D/M/YY')
        self.assert_pattern('%d %B %Y', 'DD MMMM YYYY')
        self.assert_pattern('%a %d %b', 'ddd DD MMM')
        self.assert_pattern('%A', 'dddd')
        self.assert_pattern('%Y-%j', 'YYYY-DDDD')

    def test_times(self):
        self.assert_pattern('%H:%M:%S', 'HH:mm:ss')
        self.assert_pattern('%I:%M %p', 'h:m a')
        self.assert_pattern('%H:%M:%S.%f %z', 'HH:mm:ss.SSS Z')
        self.assert_pattern('%S.%f', 's.SSSSSS')
        self.assert_pattern('%z', 'ZZ')

    def test_literals(self):
        self.assert_pattern('%Y at %H', 'YYYY [at] HH')
        self.assert_pattern('Year %Y', '[Year] YYYY')
        self.assert_pattern('100%%', '100%')
        self.assert_pattern('%d-%%d', 'D-[%d]')
        self.assert_pattern('%Y%m%dT%H', 'YYYYMMDD[T]HH')

    def test_tokens(self):
        tokens = list(tokenizer('YYYY [of] MMM'))
        assert tokens == [(False, '%Y'), (True, ' '), (True, 'of'), (True, ' '), (False, '%b')], tokens

    def test_type(self):
        with self.assertRaises(TypeError):
            _to_strptime(None)
        with self.assertRaises(TypeError):
            to_strptime(2024)


class TranslateTest(TestCase):

    def test_mapping(self):
        text = translate('5 марта 2024', {'Марта': 'March'})
        assert text == '5 March 2024', text
        text = translate('lundi 4 mars', {'lundi': 'Monday', 'mars': 'March'})
        assert text == 'Monday 4 March', text

    def test_callable(self):
        text = translate('5 mar 2024', str.upper)
        assert text == '5 MAR 2024', text

    def test_none(self):
        assert translate('5 марта 2024') == '5 марта 2024'
        assert translate('2024-01-01', {'2024': 'never'}) == '2024-01-01'

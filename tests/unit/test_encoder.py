from unittest import TestCase
from lazymint.db.encoder import encode, decode, escape_key, unescape_key


class TestEncoder(TestCase):
    def test_small_int_encodes_plain(self):
        self.assertEqual(encode(123), '123')

    def test_big_int_round_trips(self):
        big = 2 ** 256 - 1
        e = encode(big)

        self.assertIn('__big_int__', e)
        self.assertEqual(decode(e), big)

    def test_big_int_inside_dict_and_list(self):
        data = {'word': 2 ** 70, 'ids': [1, 2 ** 64], 'name': 'stu'}
        self.assertEqual(decode(encode(data)), data)

    def test_bool_is_not_treated_as_int(self):
        self.assertEqual(encode(True), 'true')
        self.assertIs(decode(encode(True)), True)

    def test_decode_none_returns_none(self):
        self.assertIsNone(decode(None))

    def test_decode_bytes(self):
        self.assertEqual(decode(b'{"a":1}'), {'a': 1})

    def test_decode_garbage_returns_none(self):
        self.assertIsNone(decode('{not json'))

    def test_escape_key_leaves_plain_identifiers(self):
        self.assertEqual(escape_key('stu_1-a'), 'stu_1-a')

    def test_escape_key_hides_delimiters(self):
        escaped = escape_key('a:b.c%d')

        self.assertNotIn(':', escaped)
        self.assertNotIn('.', escaped)
        self.assertEqual(unescape_key(escaped), 'a:b.c%d')

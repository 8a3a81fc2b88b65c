from unittest import TestCase
from pathlib import Path
import tempfile
from lazymint.db.driver import FSDriver, ContractDriver


class TestFSDriver(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.d = FSDriver(root=self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_directories_created(self):
        self.assertTrue(Path(self.tmp.name).joinpath('contract_state').is_dir())
        self.assertTrue(Path(self.tmp.name).joinpath('run_state').is_dir())

    def test_set_get(self):
        self.d.set('token.balances:stu', 5)
        self.assertEqual(self.d.get('token.balances:stu'), 5)

    def test_values_survive_a_new_driver(self):
        self.d.set('token.minted:0', 2 ** 255)
        self.d.set('token.default_holder', 'stu')

        d2 = FSDriver(root=self.tmp.name)

        self.assertEqual(d2.get('token.minted:0'), 2 ** 255)
        self.assertEqual(d2.get('token.default_holder'), 'stu')

    def test_one_file_per_contract(self):
        self.d.set('token.balances:stu', 5)
        self.d.set('token.balances:colin', 6)
        self.d.set('other.balances:stu', 7)

        files = sorted(p.name for p in Path(self.tmp.name).joinpath('contract_state').iterdir())
        self.assertEqual(files, ['other.json', 'token.json'])

    def test_misc_keys_go_to_run_state(self):
        self.d.set('thing', 1)

        self.assertTrue(Path(self.tmp.name).joinpath('run_state', '__misc.json').is_file())
        self.assertEqual(self.d.get('thing'), 1)
        self.assertEqual(self.d.keys(), ['thing'])

    def test_delete_removes_key_and_empty_file(self):
        self.d.set('token.owners:1', 'stu')
        self.d.delete('token.owners:1')

        self.assertIsNone(self.d.get('token.owners:1'))
        self.assertFalse(Path(self.tmp.name).joinpath('contract_state', 'token.json').exists())

    def test_set_none_deletes(self):
        self.d.set('token.owners:1', 'stu')
        self.d.set('token.owners:1', None)
        self.assertEqual(self.d.keys(), [])

    def test_iter_and_keys(self):
        self.d.set('token.owners:1', 'stu')
        self.d.set('token.owners:2', 'colin')
        self.d.set('token.balances:stu', 1)

        self.assertEqual(self.d.iter('token.owners:'), ['token.owners:1', 'token.owners:2'])
        self.assertEqual(self.d.iter('token.owners:', length=1), ['token.owners:1'])
        self.assertEqual(len(self.d.keys()), 3)

    def test_flush(self):
        self.d.set('token.owners:1', 'stu')
        self.d.set('thing', 1)
        self.d.flush()

        self.assertEqual(self.d.keys(), [])

    def test_contract_driver_commits_to_disk(self):
        c = ContractDriver(driver=self.d)
        c.set('token.owners:1', 'stu')

        self.assertIsNone(self.d.get('token.owners:1'))

        c.commit()

        self.assertEqual(FSDriver(root=self.tmp.name).get('token.owners:1'), 'stu')

from unittest import TestCase
from lazymint.db.driver import ContractDriver
from lazymint.token.ownership import OwnershipStore, validate_holder, validate_item, is_valid_holder
from lazymint.exceptions import NotFound, InvalidHolder, InvalidItem
from lazymint import config


class TestValidation(TestCase):
    def test_null_holders_rejected(self):
        for holder in (None, '', config.ZERO_HOLDER):
            with self.assertRaises(InvalidHolder):
                validate_holder(holder)

    def test_non_string_holders_rejected(self):
        for holder in (1, b'stu', ['stu']):
            with self.assertRaises(InvalidHolder):
                validate_holder(holder)

    def test_holders_with_key_characters_accepted(self):
        for holder in ('stu:colin', 'stu.colin', 'a' * 5000, '100%'):
            self.assertEqual(validate_holder(holder), holder)

    def test_valid_holder(self):
        self.assertEqual(validate_holder('stu'), 'stu')

    def test_items_are_non_negative_ints(self):
        self.assertEqual(validate_item(0), 0)
        self.assertEqual(validate_item(2 ** 300), 2 ** 300)
        self.assertEqual(validate_item(10 ** 1100), 10 ** 1100)

        for item_id in (-1, '1', 1.0, True, None):
            with self.assertRaises(InvalidItem):
                validate_item(item_id)

    def test_items_beyond_decimal_limit_rejected(self):
        self.assertEqual(validate_item(2 ** config.MAX_ITEM_BITS - 1), 2 ** config.MAX_ITEM_BITS - 1)

        with self.assertRaises(InvalidItem):
            validate_item(2 ** config.MAX_ITEM_BITS)


class TestOwnershipStore(TestCase):
    def setUp(self):
        self.driver = ContractDriver()
        self.store = OwnershipStore('token', self.driver)
        self.store.initialize('default')

    def test_initialize_requires_valid_holder(self):
        store = OwnershipStore('other', self.driver)
        with self.assertRaises(InvalidHolder):
            store.initialize(None)

    def test_unminted_item_not_found(self):
        with self.assertRaises(NotFound):
            self.store.resolve(1)

    def test_minted_item_resolves_to_default(self):
        self.store.mark_minted(1)
        self.assertEqual(self.store.resolve(1), 'default')

    def test_minted_bits_share_a_word(self):
        self.store.mark_minted(0)
        self.store.mark_minted(255)
        self.store.mark_minted(256)

        self.assertTrue(self.store.exists(0))
        self.assertTrue(self.store.exists(255))
        self.assertTrue(self.store.exists(256))
        self.assertFalse(self.store.exists(1))

        self.assertEqual(self.driver.get('token.minted:0'), 1 | (1 << 255))
        self.assertEqual(self.driver.get('token.minted:1'), 1)

    def test_huge_item_ids(self):
        item_id = 2 ** 128 + 7
        self.store.mark_minted(item_id)
        self.driver.commit()

        self.assertTrue(self.store.exists(item_id))
        self.assertFalse(self.store.exists(item_id + 1))

    def test_override_resolves_to_explicit_holder(self):
        self.store.mark_minted(1)
        self.store.set_override(1, 'stu')

        self.assertEqual(self.store.resolve(1), 'stu')
        self.assertEqual(self.store.overrides(), {1: 'stu'})

    def test_override_to_default_removes_entry(self):
        self.store.mark_minted(1)
        self.store.set_override(1, 'stu')
        self.store.set_override(1, 'default')

        self.assertEqual(self.store.resolve(1), 'default')
        self.assertEqual(self.store.override_count(), 0)

    def test_override_to_default_without_entry_writes_nothing(self):
        self.store.mark_minted(1)
        self.driver.commit()

        self.store.set_override(1, 'default')

        self.assertEqual(self.driver.pending_writes, {})

    def test_migrate_changes_implicit_owner_only(self):
        self.store.mark_minted(1)
        self.store.mark_minted(2)
        self.store.set_override(2, 'stu')

        previous = self.store.migrate_default_holder('new')

        self.assertEqual(previous, 'default')
        self.assertEqual(self.store.resolve(1), 'new')
        self.assertEqual(self.store.resolve(2), 'stu')

    def test_migrate_collapses_overrides_of_new_default(self):
        self.store.mark_minted(1)
        self.store.set_override(1, 'stu')

        self.store.migrate_default_holder('stu')

        self.assertEqual(self.store.resolve(1), 'stu')
        self.assertEqual(self.store.override_count(), 0)

    def test_migrate_to_null_holder_fails(self):
        with self.assertRaises(InvalidHolder):
            self.store.migrate_default_holder(config.ZERO_HOLDER)

        self.assertEqual(self.store.default_holder, 'default')

    def test_item_ids_longer_than_a_thousand_digits(self):
        item_id = 10 ** 1100

        with self.assertRaises(NotFound):
            self.store.resolve(item_id)

        self.store.mark_minted(item_id)
        self.store.set_override(item_id, 'stu')
        self.driver.commit()

        self.assertEqual(self.store.resolve(item_id), 'stu')
        self.assertEqual(self.store.overrides(), {item_id: 'stu'})

import unittest
import uuid

from core.connections import ConnectionRegistry


class TestConnectionRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = ConnectionRegistry()
        self.user = uuid.uuid4()

    def test_user_with_several_sockets(self):
        self.registry.add_connection(self.user, "sock-1")
        self.registry.add_connection(self.user, "sock-2")

        self.assertEqual(self.registry.get_sockets_for_user(self.user), {"sock-1", "sock-2"})
        self.assertEqual(self.registry.get_user_for_socket("sock-2"), str(self.user))
        self.assertTrue(self.registry.is_online(self.user))

    def test_remove_last_socket_goes_offline(self):
        self.registry.add_connection(self.user, "sock-1")
        self.registry.add_connection(self.user, "sock-2")

        self.assertEqual(self.registry.remove_connection("sock-1"), str(self.user))
        self.assertTrue(self.registry.is_online(self.user))

        self.registry.remove_connection("sock-2")
        self.assertFalse(self.registry.is_online(self.user))
        self.assertEqual(self.registry.get_sockets_for_user(self.user), set())

    def test_remove_unknown_socket(self):
        self.assertIsNone(self.registry.remove_connection("nope"))

    def test_socket_reassigned_to_new_user(self):
        other = uuid.uuid4()
        self.registry.add_connection(self.user, "sock-1")
        self.registry.add_connection(other, "sock-1")

        self.assertFalse(self.registry.is_online(self.user))
        self.assertEqual(self.registry.get_user_for_socket("sock-1"), str(other))

    def test_returned_set_is_a_copy(self):
        self.registry.add_connection(self.user, "sock-1")
        self.registry.get_sockets_for_user(self.user).add("sock-x")

        self.assertEqual(self.registry.get_sockets_for_user(self.user), {"sock-1"})

    def test_string_and_uuid_ids_are_equivalent(self):
        self.registry.add_connection(str(self.user), "sock-1")
        self.assertTrue(self.registry.is_online(self.user))

    def test_clear(self):
        self.registry.add_connection(self.user, "sock-1")
        self.registry.clear()
        self.assertFalse(self.registry.is_online(self.user))
        self.assertIsNone(self.registry.get_user_for_socket("sock-1"))


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
End-to-end tests for the acceptor in tcpchat/server.py

A real ChatServer listens on an ephemeral localhost port and the tests
talk to it over TCP.
"""

import socket
import threading
import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from tcpchat.config import ServerConfig
from tcpchat.messages import NAME_PROMPT
from tcpchat.server import ChatServer

from test_session import Peer, STAMP, TIMEOUT


class TestChatServer(unittest.TestCase):
    """Test cases for ChatServer."""

    def setUp(self):
        self.transcript = Mock()
        self.server = ChatServer(ServerConfig(host='127.0.0.1', port=0), transcript=self.transcript)
        self.server.listen()
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        self.addCleanup(self.server.shutdown)

    def connect(self):
        sock = socket.create_connection(self.server.address, timeout=TIMEOUT)
        peer = Peer(sock)
        self.addCleanup(peer.close)
        return peer

    def join(self, name):
        peer = self.connect()
        peer.expect(NAME_PROMPT)
        peer.send(name)
        peer.expect(f"{name} has joined our chat...\n")
        return peer

    def test_address_is_bound(self):
        host, port = self.server.address
        self.assertEqual(host, '127.0.0.1')
        self.assertNotEqual(port, 0)

    def test_two_clients_chat(self):
        alice = self.join("Alice")
        bob = self.join("Bob")
        alice.expect("Bob has joined our chat...\n")
        bob.expect("Alice has joined our chat...\n")

        alice.send("hello")
        self.assertRegex(alice.expect("hello\n"), STAMP + r"\[Alice\]: hello\n$")
        self.assertRegex(bob.expect("hello\n"), "^" + STAMP + r"\[Alice\]: hello\n$")
        self.assertEqual(len(self.server.store), 3)
        self.assertEqual(self.transcript.record.call_count, 3)

    def test_capacity_gate_and_freed_slot(self):
        peers = [self.join(f"user{i}") for i in range(10)]
        self.assertEqual(len(self.server.registry), 10)

        with self.assertLogs(level='WARNING') as logs:
            rejected = self.connect()
            self.assertEqual(rejected.read_until_closed(), "")
        self.assertTrue(any("Server is full" in line for line in logs.output))
        self.assertEqual(len(self.server.registry), 10)

        peers[0].close()
        peers[1].expect("user0 has left our chat...\n")

        late = self.join("late")
        late.send("made it")
        peers[1].expect("[late]: made it\n")
        self.assertEqual(len(self.server.registry), 10)

    def test_shutdown_stops_accept_loop(self):
        self.server.shutdown()
        self.thread.join(TIMEOUT)
        self.assertFalse(self.thread.is_alive())
        self.assertIsNone(self.server.address)


class TestConfiguredNameRules(unittest.TestCase):

    def test_config_controls_rename_length(self):
        config = ServerConfig(host='127.0.0.1', port=0, name_min_length=2, name_max_length=4)
        self.assertEqual((config.name_min_length, config.name_max_length), (2, 4))
        server = ChatServer(config, transcript=Mock())
        server.listen()
        self.addCleanup(server.shutdown)
        threading.Thread(target=server.serve_forever, daemon=True).start()

        peer = Peer(socket.create_connection(server.address, timeout=TIMEOUT))
        self.addCleanup(peer.close)
        peer.expect(NAME_PROMPT)
        peer.send("Alice")
        peer.expect("Alice has joined our chat...\n")

        peer.send("/name Alicia")
        peer.expect("Must be between 2 and 4 characters.\n")
        peer.send("/name Al")
        peer.expect("[Alice]: changed their name to Al\n")


class TestStartupErrors(unittest.TestCase):

    def test_bind_failure_raises(self):
        holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.addCleanup(holder.close)
        holder.bind(('127.0.0.1', 0))
        holder.listen()
        port = holder.getsockname()[1]

        server = ChatServer(ServerConfig(host='127.0.0.1', port=port), transcript=Mock())
        with self.assertRaises(OSError):
            server.listen()
        self.assertIsNone(server.server_socket)


if __name__ == '__main__':
    unittest.main()

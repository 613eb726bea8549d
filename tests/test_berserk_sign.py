# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

import sys
import unittest
from unittest import mock

from berserk.sign import main, help_msg
from berserk.outcome import Success, Retryable, Fatal
from berserk.errors import UnsupportedParameters


class TestHelp(unittest.TestCase):
    @mock.patch("builtins.print")
    def test_help_msg(self, mock_print):
        help_msg()
        mock_print.assert_called_once()
        self.assertIn("--help", mock_print.call_args[0][0])


class TestMain(unittest.TestCase):
    @mock.patch("builtins.print")
    def test_help(self, mock_print):
        args = ["sign.py", "--help"]

        with mock.patch("sys.argv", args):
            with self.assertRaises(SystemExit) as exc:
                main()

        self.assertEqual(exc.exception.code, 0)
        self.assertIn("--help", mock_print.call_args[0][0])

    def test_missing_params(self):
        args = ["sign.py"]

        with mock.patch("sys.argv", args):
            with self.assertRaises(ValueError) as err:
                main()

        self.assertIn("Exactly one of", str(err.exception))

    def test_digest_and_message(self):
        args = ["sign.py", "--digest", "00" * 20, "-m", "text"]

        with mock.patch("sys.argv", args):
            with self.assertRaises(ValueError) as err:
                main()

        self.assertIn("Exactly one of", str(err.exception))

    def test_unexpected_arguments(self):
        args = ["sign.py", "-m", "text", "extra"]

        with mock.patch("sys.argv", args):
            with self.assertRaises(ValueError) as err:
                main()

        self.assertIn("Unexpected arguments", str(err.exception))

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge")
    def test_digest(self, mock_forge, mock_print):
        mock_forge.return_value = Success(b"\x01\xab")
        args = ["sign.py", "-b", "1024", "--digest", "aa" * 19 + "ab"]

        with mock.patch("sys.argv", args):
            main()

        mock_forge.assert_called_once_with(
            "sha1", 1024, bytearray(b"\xaa" * 19 + b"\xab"))
        mock_print.assert_called_once_with("01ab")

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge_message")
    def test_message(self, mock_forge_message, mock_print):
        mock_forge_message.return_value = (Success(b"\xff"), b"text")
        args = ["sign.py", "-m", "text", "--hash", "SHA-1",
                "--attempts", "4"]

        with mock.patch("sys.argv", args):
            main()

        mock_forge_message.assert_called_once_with(2048, b"text", "SHA-1", 4)
        mock_print.assert_called_once_with("ff")

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge_message")
    def test_message_file(self, mock_forge_message, mock_print):
        mock_forge_message.return_value = (Success(b"\xff"), b"data\n")
        args = ["sign.py", "--message-file", "/tmp/message"]
        open_mock = mock.mock_open(read_data=b"data\n")

        with mock.patch("sys.argv", args):
            with mock.patch("builtins.open", open_mock):
                main()

        open_mock.assert_called_once_with("/tmp/message", "rb")
        mock_forge_message.assert_called_once_with(2048, b"data\n", "sha1",
                                                   16)

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge_message")
    def test_message_changed(self, mock_forge_message, mock_print):
        mock_forge_message.return_value = (Success(b"\xff"), b"text  ")
        args = ["sign.py", "-m", "text"]

        with mock.patch("sys.argv", args):
            main()

        mock_print.assert_any_call(
            "Signature made for the message with 2 space(s) appended",
            file=sys.stderr)
        mock_print.assert_called_with("ff")

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge")
    def test_output_file(self, mock_forge, mock_print):
        mock_forge.return_value = Success(b"\x01\x02")
        args = ["sign.py", "--digest", "01" * 20, "-o", "/tmp/sig.bin"]
        open_mock = mock.mock_open()

        with mock.patch("sys.argv", args):
            with mock.patch("builtins.open", open_mock):
                main()

        open_mock.assert_called_once_with("/tmp/sig.bin", "wb")
        open_mock().write.assert_called_once_with(b"\x01\x02")
        mock_print.assert_not_called()

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge")
    def test_retryable(self, mock_forge, mock_print):
        mock_forge.return_value = Retryable("Suffix is even")
        args = ["sign.py", "--digest", "aa" * 20]

        with mock.patch("sys.argv", args):
            with self.assertRaises(SystemExit) as exc:
                main()

        self.assertEqual(exc.exception.code, 1)
        self.assertIn("Suffix is even", mock_print.call_args[0][0])

    @mock.patch("builtins.print")
    @mock.patch("berserk.sign.forge_message")
    def test_fatal(self, mock_forge_message, mock_print):
        mock_forge_message.return_value = (
            Fatal("Unsupported", UnsupportedParameters), b"text")
        args = ["sign.py", "-b", "4096", "-m", "text"]

        with mock.patch("sys.argv", args):
            with self.assertRaises(SystemExit) as exc:
                main()

        self.assertEqual(exc.exception.code, 2)
        mock_forge_message.assert_called_once_with(4096, b"text", "sha1", 16)

    @mock.patch("builtins.print")
    def test_end_to_end(self, mock_print):
        args = ["sign.py", "-b", "1024", "--digest", "aa" * 19 + "ab"]

        with mock.patch("sys.argv", args):
            main()

        signature = mock_print.call_args[0][0]
        self.assertEqual(len(signature), 256)
        self.assertEqual(len(bytes.fromhex(signature)), 128)

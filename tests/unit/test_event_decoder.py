"""Unit tests for the Transfer log decoder."""

import pytest

from nft_indexer.config.constants import TRANSFER_TOPIC
from nft_indexer.services.event_decoder import EventDecoder
from nft_indexer.utils.exceptions import DecodeError

CONTRACT = "0xac5c7493036de60e63eb81c5e9a440b42f47ebf5"
ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40


@pytest.fixture
def decoder():
    return EventDecoder()


class TestDecode:
    """Tests for EventDecoder.decode."""

    def test_decodes_erc721_transfer(self, decoder, make_log):
        """Sender, receiver and token id come from the indexed topics."""
        decoded = decoder.decode(make_log(ALICE, BOB, 1234))

        assert decoded.from_address == ALICE
        assert decoded.to_address == BOB
        assert decoded.token_id == 1234

    def test_addresses_are_lowercased(self, decoder, make_log):
        """Checksummed input still yields lowercase addresses."""
        checksummed = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0"
        decoded = decoder.decode(make_log(checksummed, BOB, 1))

        assert decoded.from_address == checksummed.lower()

    def test_mint_from_zero_address(self, decoder, make_log):
        """Mints come from the zero address."""
        zero = "0x" + "0" * 40
        decoded = decoder.decode(make_log(zero, ALICE, 7))

        assert decoded.from_address == zero

    def test_max_uint256_token_id(self, decoder, make_log):
        """Token ids use the full uint256 range."""
        decoded = decoder.decode(make_log(ALICE, BOB, 2**256 - 1))

        assert decoded.token_id == 2**256 - 1

    def test_erc20_shaped_log_rejected(self, decoder, make_log):
        """Three topics plus data is an ERC-20 Transfer, not ERC-721."""
        log = make_log(ALICE, BOB, 1)
        erc20 = make_log(
            ALICE, BOB, 1,
            topics=log.topics[:3],
            data="0x" + f"{10**18:064x}",
        )

        with pytest.raises(DecodeError, match="expected 4 topics"):
            decoder.decode(erc20)

    def test_non_empty_data_rejected(self, decoder, make_log):
        """ERC-721 Transfer carries no data."""
        log = make_log(ALICE, BOB, 1, data="0x" + "00" * 32)

        with pytest.raises(DecodeError, match="no data"):
            decoder.decode(log)

    def test_wrong_signature_rejected(self, decoder, make_log):
        """Only the Transfer signature is accepted as topic0."""
        log = make_log(ALICE, BOB, 1)
        approval = make_log(
            ALICE, BOB, 1,
            topics=["0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"]
            + log.topics[1:],
        )

        with pytest.raises(DecodeError, match="unexpected topic0"):
            decoder.decode(approval)

    def test_dirty_address_padding_rejected(self, decoder, make_log):
        """Non-zero bytes above a 20-byte address are a layout mismatch."""
        log = make_log(ALICE, BOB, 1)
        dirty = "0x" + "ff" * 12 + ALICE[2:]
        bad = make_log(ALICE, BOB, 1, topics=[log.topics[0], dirty] + log.topics[2:])

        with pytest.raises(DecodeError):
            decoder.decode(bad)

    def test_short_topic_rejected(self, decoder, make_log):
        """Every topic must be 32 bytes."""
        log = make_log(ALICE, BOB, 1)
        bad = make_log(ALICE, BOB, 1, topics=log.topics[:3] + ["0x01"])

        with pytest.raises(DecodeError, match="32 bytes"):
            decoder.decode(bad)

    def test_malformed_hex_rejected(self, decoder, make_log):
        """Non-hex topics raise DecodeError, not ValueError."""
        log = make_log(ALICE, BOB, 1)
        bad = make_log(ALICE, BOB, 1, topics=log.topics[:3] + ["0x" + "zz" * 32])

        with pytest.raises(DecodeError, match="malformed hex"):
            decoder.decode(bad)


class TestMatches:
    """Tests for EventDecoder.matches."""

    def test_transfer_of_watched_contract(self, decoder, make_log):
        assert decoder.matches(make_log(ALICE, BOB, 1), CONTRACT)

    def test_address_compare_is_case_insensitive(self, decoder, make_log):
        log = make_log(ALICE, BOB, 1, address=CONTRACT.upper().replace("0X", "0x"))

        assert decoder.matches(log, CONTRACT)

    def test_other_contract_ignored(self, decoder, make_log):
        log = make_log(ALICE, BOB, 1, address="0x" + "1" * 40)

        assert not decoder.matches(log, CONTRACT)

    def test_other_event_ignored(self, decoder, make_log):
        log = make_log(ALICE, BOB, 1, topics=["0x" + "00" * 32])

        assert not decoder.matches(log, CONTRACT)

    def test_anonymous_log_ignored(self, decoder, make_log):
        log = make_log(ALICE, BOB, 1, topics=[])

        assert not decoder.matches(log, CONTRACT)

    def test_topic_constant(self, decoder):
        assert decoder.topic == TRANSFER_TOPIC

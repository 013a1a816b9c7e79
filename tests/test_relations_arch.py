"""Tests for architecture token validation and matching."""

import pytest

from relations import Arch, InvalidArchitectureError, parse_arch


class TestParseArch:
    """parse_arch expansion and validation."""

    def test_plain_cpu(self):
        """Test a bare cpu implies gnu-linux."""
        assert parse_arch("amd64") == Arch(abi="gnu", os="linux", cpu="amd64")

    def test_os_cpu(self):
        """Test two components imply the gnu ABI."""
        assert parse_arch("kfreebsd-i386") == Arch(abi="gnu", os="kfreebsd", cpu="i386")

    def test_full_tuple(self):
        """Test three explicit components."""
        assert parse_arch("musl-linux-arm64") == Arch(abi="musl", os="linux", cpu="arm64")

    @pytest.mark.parametrize("token", ["any", "all"])
    def test_special_tokens(self, token):
        """Test any/all fill every component."""
        assert parse_arch(token) == Arch(abi=token, os=token, cpu=token)

    @pytest.mark.parametrize("token", ["", "a-b-c-d", "AMD64", "amd 64", "-amd64", "linux-", "x86!"])
    def test_invalid(self, token):
        """Test malformed tokens are rejected."""
        with pytest.raises(InvalidArchitectureError) as exc:
            parse_arch(token)
        assert exc.value.token == token
        assert exc.value.offset is None

    @pytest.mark.parametrize("token", [
        "amd64", "any", "all", "linux-any", "any-amd64", "kfreebsd-i386", "musl-linux-arm64", "any-any",
    ])
    def test_str_round_trips(self, token):
        """Test the canonical form parses back to the same tuple."""
        arch = parse_arch(token)
        assert str(arch) == token
        assert parse_arch(str(arch)) == arch

    def test_str_shortens_gnu_linux(self):
        """Test the canonical form drops implied components."""
        assert str(Arch("gnu", "linux", "armhf")) == "armhf"
        assert str(Arch("gnu", "hurd", "i386")) == "hurd-i386"


class TestArchMatching:
    """Wildcard-aware comparison."""

    def test_exact(self):
        """Test identical tuples match."""
        assert parse_arch("amd64").is_(parse_arch("amd64"))
        assert not parse_arch("amd64").is_(parse_arch("i386"))

    def test_os_wildcard(self):
        """Test linux-any matches Linux cpus only."""
        assert parse_arch("linux-any").is_(parse_arch("amd64"))
        assert not parse_arch("linux-any").is_(parse_arch("kfreebsd-i386"))

    def test_cpu_wildcard(self):
        """Test any-amd64 matches amd64 on any OS."""
        assert parse_arch("any-amd64").is_(parse_arch("kfreebsd-amd64"))
        assert not parse_arch("any-amd64").is_(parse_arch("arm64"))

    def test_any_matches_everything(self):
        """Test any matches any tuple, including all."""
        assert parse_arch("any").is_(parse_arch("armel"))
        assert parse_arch("any").is_(parse_arch("all"))

    def test_all_is_not_a_wildcard(self):
        """Test all only matches all and any."""
        assert parse_arch("all").is_(parse_arch("all"))
        assert not parse_arch("all").is_(parse_arch("amd64"))
        assert not parse_arch("amd64").is_(parse_arch("all"))

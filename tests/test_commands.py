import pytest

from preflight.commands import POWER, REMOVE, UNKNOWN, classify


@pytest.mark.parametrize("command", ["reboot", "shutdown", "poweroff", "halt"])
def test_power_commands(command: str) -> None:
    advisory = classify([command, "now"])
    assert advisory.kind == POWER
    assert advisory.command == command
    assert advisory.args == ["now"]


@pytest.mark.parametrize(
    "argv",
    [
        ["rm", "-rf", "build"],
        ["rm", "-fr", "build"],
        ["rm", "-Rf", "build"],
        ["rm", "-r", "-f", "build"],
        ["rm", "--recursive", "build"],
        ["rm", "build", "-rf"],
    ],
)
def test_recursive_removal(argv) -> None:
    advisory = classify(argv)
    assert advisory.kind == REMOVE
    assert advisory.targets == ["build"]


def test_recursive_removal_with_several_targets() -> None:
    advisory = classify(["rm", "-rf", "a", "b", "--", "-weird"])
    assert advisory.kind == REMOVE
    assert advisory.targets == ["a", "b", "-weird"]


@pytest.mark.parametrize(
    "argv",
    [
        ["rm", "-rf"],
        ["rm", "-f", "build"],
        ["rm", "build"],
        ["ls", "-la"],
        ["mkfs.ext4", "/dev/sda1"],
        [],
    ],
)
def test_unrecognized(argv) -> None:
    assert classify(argv).kind == UNKNOWN

from datetime import datetime

import pytest

from zerobotkit.event import (
    AutoAgree,
    RequestKind,
    decode_flag,
    encode_flag,
    format_request_notice,
    parse_decision,
    parse_toggle,
    should_auto_approve,
)

WHEN = datetime(2022, 1, 2, 3, 4, 5)


def test_encode_zero_flag():
    assert encode_flag("0") == "一一一一"


@pytest.mark.parametrize("flag", ["0", "1", "1234567890", str((1 << 56) - 1)])
def test_flag_round_trip(flag):
    assert decode_flag(encode_flag(flag)) == flag


def test_encoded_flag_is_four_chars():
    text = encode_flag("987654321")
    assert len(text) == 4
    assert all(0x4E00 <= ord(c) <= 0x8E00 for c in text)


def test_top_byte_is_dropped():
    assert decode_flag(encode_flag(str((1 << 56) + 5))) == "5"


def test_bad_flag():
    with pytest.raises(ValueError):
        encode_flag("abc")
    with pytest.raises(ValueError):
        encode_flag(str(1 << 64))


def test_settings_value_round_trip():
    for value in range(8):
        assert AutoAgree.from_value(value).value == value


def test_settings_from_value_bits():
    s = AutoAgree.from_value(0b101)
    assert (s.apply, s.invite, s.master_off) == (True, False, True)


def test_with_option():
    s = AutoAgree()
    s = s.with_option("申请", "开启")
    assert s.apply is True
    s = s.with_option("邀请", "开启")
    assert s.invite is True
    s = s.with_option("主人", "关闭")
    assert s.master_off is True
    s = s.with_option("申请", "关闭")
    assert s.apply is False
    assert s.with_option("主人", "开启").master_off is False


def test_with_option_errors():
    with pytest.raises(ValueError):
        AutoAgree().with_option("其他", "开启")
    with pytest.raises(ValueError):
        AutoAgree().with_option("申请", "也许")


def test_parse_toggle():
    toggle = parse_toggle("开启自动同意邀请")
    assert toggle.option == "开启"
    assert toggle.target == "邀请"
    assert parse_toggle("开启自动同意邀请吧") is None


def test_parse_decision():
    flag = encode_flag("424242")
    decision = parse_decision("同意申请 " + flag + " welcome")
    assert decision.approve is True
    assert decision.kind is RequestKind.FRIEND
    assert decision.flag == "424242"
    assert decision.reason == "welcome"


def test_parse_decision_reject_invite():
    flag = encode_flag("77")
    decision = parse_decision("拒绝邀请" + flag)
    assert decision.approve is False
    assert decision.kind is RequestKind.INVITE
    assert decision.flag == "77"
    assert decision.reason == ""


def test_parse_decision_no_match():
    assert parse_decision("同意申请 abcd") is None


@pytest.mark.parametrize(
    "settings,kind,su,expected",
    [
        (AutoAgree(), RequestKind.FRIEND, False, False),
        (AutoAgree(), RequestKind.FRIEND, True, True),
        (AutoAgree(master_off=True), RequestKind.FRIEND, True, False),
        (AutoAgree(apply=True), RequestKind.FRIEND, False, True),
        (AutoAgree(apply=True), RequestKind.INVITE, False, False),
        (AutoAgree(invite=True), "邀请", False, True),
    ],
)
def test_should_auto_approve(settings, kind, su, expected):
    assert should_auto_approve(settings, kind, su) is expected


def test_invite_notice_approved():
    notes = format_request_notice(RequestKind.INVITE, WHEN, "alice", 10001, "FLAG", True,
                                  groupname="grp", groupid=20002)
    assert notes == [
        "已自动同意在2022-01-02 03:04:05收到来自\n用户:[alice](10001)的群聊邀请"
        "\n群聊:[grp](20002)\nflag:FLAG"
    ]


def test_friend_notice_pending():
    notes = format_request_notice(RequestKind.FRIEND, WHEN, "bob", 5, "FLAG", False, comment="hi")
    assert len(notes) == 2
    assert notes[1] == "FLAG"
    assert notes[0].startswith("在2022-01-02 03:04:05收到来自\n用户:[bob](5)\n的好友请求:hi")
    assert notes[0].endswith("\n同意/拒绝申请，来决定同意还是拒绝")
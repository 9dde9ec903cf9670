from decimal import Decimal as D

from bonus_tax.core.progressive import bonus_tax
from bonus_tax.core.traps import bracket_traps, find_trap


def test_trap_zones_for_each_threshold():
    traps = bracket_traps()
    assert [(t.threshold, t.trap_end) for t in traps] == [
        (D("36000"), D("38566.67")),
        (D("144000"), D("160500.00")),
        (D("300000"), D("318333.33")),
        (D("420000"), D("447500.00")),
        (D("660000"), D("706538.46")),
        (D("960000"), D("1120000.00")),
    ]


def test_tax_jump_matches_bonus_tax_delta():
    first = bracket_traps()[0]
    assert first.rate_below == D("0.03")
    assert first.rate_above == D("0.10")
    assert first.tax_jump == D("2310.00")
    # tax on 36,000.01 minus tax on 36,000, less the marginal cent
    assert bonus_tax(D("36000.01")) - bonus_tax(D("36000")) == D("2310.00")


def test_larger_bonus_nets_less_inside_trap():
    at_threshold = D("36000") - bonus_tax(D("36000"))
    inside = D("38000") - bonus_tax(D("38000"))
    past = D("39000") - bonus_tax(D("39000"))
    assert inside < at_threshold < past


def test_find_trap():
    assert find_trap(D("38000")).threshold == D("36000")
    assert find_trap(150000).threshold == D("144000")
    assert find_trap(D("36000")) is None
    assert find_trap(D("38566.67")) is None
    assert find_trap(D("50000")) is None
    assert find_trap(0) is None

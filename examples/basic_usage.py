"""examples/basic_usage.py - debug_log walkthrough.

Demonstrates:
    Scenario A : groups, messages and value dumps from plain call sites
    Scenario B : @grouped functions, including one that raises
    Scenario C : existing logging calls routed through DebugLogHandler

Run:
    python examples/basic_usage.py                 # set_debug("*") below enables everything
    DEBUG=basic_usage python examples/basic_usage.py
"""

import logging

from debug_log import DebugLogHandler, debug_dbg, debug_log, group, grouped, set_debug

logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG)
logger.addHandler(DebugLogHandler())


# ===========================================================================
# Scenario A: explicit groups
# ===========================================================================


def load_inventory():
    with group("load inventory"):
        stock = {"apple": 10, "pear": 0, "plum": 5}
        debug_dbg(stock)
        with group("check %d products", len(stock)):
            for product, qty in stock.items():
                if not qty:
                    debug_log("%s is out of stock", product)
        return stock


# ===========================================================================
# Scenario B: decorated functions
# ===========================================================================


@grouped
def get_balance(user_id: int) -> int:
    debug_log("querying balance for user_id=%d", user_id)
    return 3_000


@grouped
def pay(user_id: int, amount: int) -> None:
    balance = debug_dbg(get_balance(user_id))
    if balance < amount:
        raise ValueError(f"InsufficientFunds: balance={balance}, amount={amount}")
    debug_log("payment successful")


# ===========================================================================
# Scenario C: standard logging inside a group
# ===========================================================================


def import_rows(rows):
    with group("import"):
        logger.info("importing %d rows", len(rows))
        debug_dbg(rows[:3], len(rows))


if __name__ == "__main__":
    # Hosts that cannot set DEBUG before start-up can switch output on here.
    set_debug("*")

    load_inventory()
    try:
        pay(user_id=101, amount=5_000)
    except ValueError:
        pass
    import_rows([{"id": i, "name": f"row-{i}"} for i in range(10)])

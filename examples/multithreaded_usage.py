"""examples/multithreaded_usage.py - Shared nesting depth across threads.

debug_log keeps one nesting depth for the whole process. When two threads
open groups at the same time their lines interleave and each thread's lines
are indented by the combined depth. Every group still closes exactly once, so
the depth is back at zero when both threads finish.

Run:
    DEBUG='*' python examples/multithreaded_usage.py
"""

import threading
import time

from debug_log import debug_log, grouped


@grouped
def fetch_inventory(product_id: int) -> int:
    debug_log("fetching inventory: product_id=%d", product_id)
    time.sleep(0.01)
    return {1: 10, 2: 0, 3: 5}.get(product_id, 0)


@grouped(label="place order")
def place_order(order_id: int, product_id: int, qty: int) -> dict:
    stock = fetch_inventory(product_id)
    if stock < qty:
        raise RuntimeError(f"OutOfStock: product_id={product_id}")
    debug_log("order placed: order_id=%d", order_id)
    return {"order_id": order_id, "status": "confirmed"}


def worker(order_id: int, product_id: int, qty: int) -> None:
    try:
        place_order(order_id, product_id, qty)
    except RuntimeError as exc:
        debug_log("[%s] %s", threading.current_thread().name, exc)


if __name__ == "__main__":
    threads = [
        threading.Thread(target=worker, args=(1001, 1, 3), name="Thread-A"),
        threading.Thread(target=worker, args=(1002, 2, 1), name="Thread-B"),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    debug_log("both threads finished")

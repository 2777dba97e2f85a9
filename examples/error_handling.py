"""Example usage of driver error normalization.

This example demonstrates:
- A driver exposing an exception converter
- Translating raw driver errors with translate_errors()
- Inspecting the normalized exception kind and cause
- Binary parameters in diagnostic messages
- Retrying deadlocks with db_retry()

Flow:
┌─────────────────┐    ┌─────────────────┐    ┌─────────────────┐
│   Your Service  │    │  translate_     │    │  Driver         │
│                 │───▶│  errors()       │───▶│  (raises raw    │
│                 │    │                 │    │   DriverError)  │
└─────────────────┘    └─────────────────┘    └─────────────────┘
                              │
                              ▼
                       ┌─────────────────┐
                       │  Exception      │
                       │  Converter      │
                       │  (kind by code) │
                       └─────────────────┘
"""

import logging

from dbcommon.database import (
    ConstraintViolationException,
    DeadlockException,
    DriverError,
    DriverException,
    MySQLExceptionConverter,
    db_retry,
    format_parameters,
    translate_errors,
)

logging.basicConfig(level=logging.DEBUG)


class FakeMySQLDriver:
    """Stand-in driver that fails the way MySQL does."""

    def __init__(self):
        self.exception_converter = MySQLExceptionConverter()
        self.deadlocks_left = 1

    def execute(self, sql: str, params: list) -> int:
        if sql.startswith("INSERT"):
            raise DriverError(
                "Duplicate entry 'ann@example.com' for key 'email'",
                error_code=1062,
                sql_state="23000",
            )
        if self.deadlocks_left:
            self.deadlocks_left -= 1
            raise DriverError("Deadlock found when trying to get lock", error_code=1213)
        return 1


driver = FakeMySQLDriver()


def insert_user(email: str, avatar: bytes) -> int:
    """Insert a user; duplicates surface as constraint violations."""
    sql = "INSERT INTO users (email, avatar) VALUES (?, ?)"
    params = [email, avatar]
    with translate_errors(driver, sql, params, table="users", operation="insert"):
        return driver.execute(sql, params)


@db_retry(max_attempts=3, min_wait=0.01, max_wait=0.05)
def update_balance(user_id: int, amount: int) -> int:
    """Update a balance; deadlocks are retried."""
    sql = "UPDATE accounts SET balance = balance + ? WHERE user_id = ?"
    params = [amount, user_id]
    with translate_errors(driver, sql, params, table="accounts", operation="update"):
        return driver.execute(sql, params)


def main():
    """Run the examples."""
    print(format_parameters(["hello", 42, None, b"\xde\xad"]))

    try:
        insert_user("ann@example.com", b"\x89PNG\r\n")
    except ConstraintViolationException as e:
        print(f"kind={e.kind} code={e.error_code} state={e.sql_state}")
        print(f"cause={e.__cause__!r}")
        print(e)

    try:
        print(f"updated rows: {update_balance(1, 10)}")
    except DeadlockException as e:
        print(f"gave up after retries: {e}")
    except DriverException as e:
        print(f"unexpected driver error: {e.kind}")


if __name__ == "__main__":
    main()

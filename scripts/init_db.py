from __future__ import annotations

from todolist.db import engine, init_db


def main() -> None:
    init_db()
    print(f"DB ready ({engine.url.render_as_string(hide_password=True)}).")


if __name__ == "__main__":
    main()

"""Command-line interface for the duty roster."""

from __future__ import annotations

import argparse
from datetime import date

from dutyroster.domain.db import get_session, init_database
from dutyroster.domain.repositories import RotationEventRepository
from dutyroster.engine.forecast import forecast_rotations
from dutyroster.engine.rotation import DutyRotationEngine
from dutyroster.host import DutyRosterHost
from dutyroster.io.config import RosterConfig, load_config
from dutyroster.io.export_csv import export_forecast_csv, export_history_csv, history_frame
from dutyroster.io.state_store import IniStateStore
from dutyroster.services.clock import FixedClock, NtpClock, SystemClock


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise SystemExit(f"Invalid date (expected YYYY-MM-DD): {value}")


def _load_cfg(args: argparse.Namespace) -> RosterConfig:
    cfg = load_config(args.config)
    if args.state:
        cfg.state_path = args.state
    if args.db:
        cfg.db_url = args.db
        cfg.record_history = True
    return cfg


def _build_engine(cfg: RosterConfig) -> DutyRotationEngine:
    store = IniStateStore(cfg.state_path)
    history = get_session(cfg.db_url) if cfg.record_history else None
    return DutyRotationEngine(
        store.load(),
        store=store,
        history=history,
        slot_count=cfg.slot_count,
        step=cfg.step,
    )


def _build_clock(cfg: RosterConfig, override: date | None = None):
    if override is not None:
        return FixedClock(override)
    if cfg.use_ntp:
        return NtpClock(cfg.ntp_servers, timeout=cfg.ntp_timeout)
    return SystemClock()


def _close(engine: DutyRotationEngine, rollback: bool = False) -> None:
    if engine.history is not None:
        if rollback:
            engine.history.rollback()
        engine.history.close()


def _print_pair(engine: DutyRotationEngine) -> None:
    duty1, duty2 = engine.current_pair()
    state = engine.state
    print(f"On duty: {duty1} & {duty2}")
    print(f"Last rotation: {state.last_update or '(never)'}")
    print(f"Origin: {state.origin_index1 + 1} & {state.origin_index2 + 1}")
    if engine.history is not None:
        latest = RotationEventRepository.get_latest(engine.history)
        if latest is not None:
            print(f"Last change: {latest.action} at {latest.occurred_at:%Y-%m-%d %H:%M}")


def _cmd_show(args: argparse.Namespace) -> None:
    """Print the current pair."""
    engine = _build_engine(_load_cfg(args))
    try:
        _print_pair(engine)
        _close(engine)
    except Exception as e:
        _close(engine, rollback=True)
        print(f"[ERROR] Show failed: {e}")
        raise


def _cmd_check(args: argparse.Namespace) -> None:
    """Rotate if today is a weekday that has not been handled yet."""
    cfg = _load_cfg(args)
    engine = _build_engine(cfg)
    try:
        clock = _build_clock(cfg, _parse_date(args.date))
        host = DutyRosterHost(engine, clock)
        host.refresh()
        _close(engine)
    except Exception as e:
        _close(engine, rollback=True)
        print(f"[ERROR] Duty check failed: {e}")
        raise


def _cmd_manual(action: str):
    def _run(args: argparse.Namespace) -> None:
        engine = _build_engine(_load_cfg(args))
        try:
            if action == "next":
                engine.advance_manually()
            elif action == "previous":
                engine.rewind_manually()
            else:
                engine.restore_to_origin()
            _print_pair(engine)
            _close(engine)
        except Exception as e:
            _close(engine, rollback=True)
            print(f"[ERROR] {action} failed: {e}")
            raise

    return _run


def _cmd_forecast(args: argparse.Namespace) -> None:
    """Project the coming rotations."""
    if args.days <= 0:
        raise SystemExit(f"--days must be positive, got {args.days}")
    cfg = _load_cfg(args)
    state = IniStateStore(cfg.state_path).load()
    start = _parse_date(args.start) or _build_clock(cfg).today()
    df = forecast_rotations(state, start, args.days, slot_count=cfg.slot_count, step=cfg.step)
    if args.out:
        export_forecast_csv(df, args.out)
    else:
        print(df.to_string(index=False))


def _cmd_history(args: argparse.Namespace) -> None:
    """Show, export or clear the rotation log."""
    cfg = _load_cfg(args)
    session = get_session(cfg.db_url)
    try:
        if args.clear:
            count = RotationEventRepository.delete_all(session)
            print(f"[OK] Deleted {count} rotation events")
        elif args.out:
            export_history_csv(session, args.out, action=args.action)
        else:
            df = history_frame(session, action=args.action)
            print(df.to_string(index=False) if not df.empty else "[INFO] No rotation history")
        session.close()
    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] History command failed: {e}")
        raise


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the history database."""
    cfg = _load_cfg(args)
    init_database(cfg.db_url)
    print(f"[OK] Database initialized: {cfg.db_url}")


def _cmd_run(args: argparse.Namespace) -> None:
    """Run the headless host loop."""
    cfg = _load_cfg(args)
    engine = _build_engine(cfg)
    host = DutyRosterHost(
        engine,
        _build_clock(cfg),
        check_interval_minutes=cfg.check_interval_minutes,
        presence_interval_seconds=cfg.presence_interval_seconds,
    )
    try:
        ticks = host.run(max_ticks=args.ticks)
        print(f"[OK] Host loop finished after {ticks} ticks")
    finally:
        _close(engine)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="dutyroster",
        description="Two-person duty roster with daily weekday rotation",
    )

    # Global options
    parser.add_argument("--config", help="Path to config YAML/JSON (optional)")
    parser.add_argument("--state", help="Path to the state INI (default: duty_config.ini)")
    parser.add_argument("--db", help="History database URL; enables rotation history")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Show the current duty pair")
    show.set_defaults(func=_cmd_show)

    chk = sub.add_parser("check", help="Rotate if due today")
    chk.add_argument("--date", help="Override today's date (YYYY-MM-DD)")
    chk.set_defaults(func=_cmd_check)

    nxt = sub.add_parser("next", help="Advance to the next duty pair")
    nxt.set_defaults(func=_cmd_manual("next"))

    prev = sub.add_parser("previous", help="Go back to the previous duty pair")
    prev.set_defaults(func=_cmd_manual("previous"))

    rst = sub.add_parser("restore", help="Restore the pair of the last automatic rotation")
    rst.set_defaults(func=_cmd_manual("restore"))

    fc = sub.add_parser("forecast", help="Forecast upcoming rotations")
    fc.add_argument("--start", help="First day (YYYY-MM-DD, default: today)")
    fc.add_argument("--days", type=int, default=14, help="Number of calendar days (default: 14)")
    fc.add_argument("--out", help="Optional: write forecast CSV")
    fc.set_defaults(func=_cmd_forecast)

    hist = sub.add_parser("history", help="Show or export rotation history")
    hist.add_argument("--action", choices=["auto", "next", "previous", "restore"], help="Filter by action")
    hist.add_argument("--out", help="Optional: export history CSV")
    hist.add_argument("--clear", action="store_true", help="Delete all recorded rotation events")
    hist.set_defaults(func=_cmd_history)

    init = sub.add_parser("init-db", help="Initialize history database")
    init.set_defaults(func=_cmd_init_db)

    run = sub.add_parser("run", help="Run the headless roster host")
    run.add_argument("--ticks", type=int, help="Stop after N loop iterations")
    run.set_defaults(func=_cmd_run)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()

from __future__ import annotations

from pathlib import Path

from everglow.config.loader import load_settings
from everglow.core.doctor import run_doctor
from everglow.core.results import SUMMARY_KEYS, load_summary_json
from everglow.storage.high_score import HighScoreStore


def _settings(args):
    return load_settings(
        data_dir=getattr(args, "data_dir", None),
        audio=False if getattr(args, "mute", False) else None,
        policy=getattr(args, "policy", None),
    )


def cmd_play(args):
    from everglow.ui.app_game import run_game

    settings = _settings(args)
    run_game(settings)


def cmd_simulate(args):
    from everglow.simulation.runner import run_and_save

    settings = _settings(args)
    if args.workers is not None:
        settings = settings.with_overrides(sim_workers=args.workers)
    run_and_save(settings, n_sims=args.sims)


def cmd_report(args):
    settings = _settings(args)
    path = Path(settings.paths.results_file)
    if not path.exists():
        print(f"[report] Missing results: {path}")
        return
    try:
        data = load_summary_json(path)
    except ValueError as exc:
        print(f"[report] Unreadable results: {exc}")
        return
    print(f"\nSIMULATION ({path})")
    print(f"  schema_version: {data['schema_version']}")
    for key in SUMMARY_KEYS:
        print(f"  {key}: {data[key]}")


def cmd_doctor(args):
    settings = _settings(args)
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")


def cmd_high_score(args):
    settings = _settings(args)
    store = HighScoreStore(settings.paths.high_score_file)
    if args.reset:
        if store.reset():
            print(f"[highscore] Reset ({store.path})")
        return
    print(f"High score: {store.load()}")

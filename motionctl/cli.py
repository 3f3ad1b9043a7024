"""Command-line interface for motionctl planning."""

from __future__ import annotations

import argparse
import logging
import sys

import motionctl.config as cfg
from motionctl.config import TRACE
from motionctl.export import encode_report, sample_profile, sample_trajectory
from motionctl.geometry import Angle, Pose2d, Vector2d
from motionctl.motion import (
    GenericConstraints,
    MotionState,
    generate_simple_motion_profile,
    generate_trajectory,
)
from motionctl.path import build_path
from motionctl.utils.errors import MotionError

logger = logging.getLogger("motionctl.cli")


def _floats(text: str, count: int) -> list[float]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != count:
        raise argparse.ArgumentTypeError(
            f"expected {count} comma-separated numbers, got '{text}'"
        )
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"non-numeric value in '{text}'") from None


def _pose_arg(text: str) -> Pose2d:
    x, y, deg = _floats(text, 3)
    return Pose2d.of(x, y, Angle.deg(deg))


def _line_leg(text: str) -> tuple:
    x, y = _floats(text, 2)
    return ("line", Vector2d(x, y))


def _spline_leg(text: str) -> tuple:
    x, y, deg = _floats(text, 3)
    return ("spline", Vector2d(x, y), Angle.deg(deg))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="motionctl", description="Plan motion profiles and trajectories"
    )

    # Verbose logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Enable quiet logging (WARNING level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    parser.add_argument(
        "-o", "--output", help="Write the JSON report to a file instead of stdout"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    prof = sub.add_parser("profile", help="1-D profile between two positions")
    prof.add_argument("--start", type=float, default=0.0, help="Start position")
    prof.add_argument("--goal", type=float, required=True, help="Goal position")
    prof.add_argument("--start-vel", type=float, default=0.0, help="Start velocity")
    prof.add_argument("--end-vel", type=float, default=0.0, help="End velocity")
    prof.add_argument("--max-vel", type=float, default=cfg.DEFAULT_MAX_VEL)
    prof.add_argument("--max-accel", type=float, default=cfg.DEFAULT_MAX_ACCEL)
    prof.add_argument("--dt", type=float, default=cfg.INTERVAL_S, help="Sample period")

    traj = sub.add_parser("trajectory", help="Timed path of lines and splines")
    traj.add_argument(
        "--start-pose",
        type=_pose_arg,
        default=Pose2d(),
        help="Start pose as X,Y,HEADING_DEG (default 0,0,0)",
    )
    traj.add_argument(
        "--line",
        dest="legs",
        action="append",
        type=_line_leg,
        help="Straight leg to X,Y (repeatable, order preserved)",
    )
    traj.add_argument(
        "--spline",
        dest="legs",
        action="append",
        type=_spline_leg,
        help="Spline leg to X,Y ending at HEADING_DEG (repeatable)",
    )
    traj.add_argument("--max-vel", type=float, default=cfg.DEFAULT_MAX_VEL)
    traj.add_argument("--max-accel", type=float, default=cfg.DEFAULT_MAX_ACCEL)
    traj.add_argument(
        "--max-ang-vel-deg", type=float, default=cfg.DEFAULT_MAX_ANG_VEL_DEG
    )
    traj.add_argument("--max-lateral-accel", type=float, default=None)
    traj.add_argument("--dt", type=float, default=cfg.INTERVAL_S, help="Sample period")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    # Precedence:
    #   1) Explicit --log-level
    #   2) Verbose / quiet flags
    #   3) Environment-driven TRACE (MOTIONCTL_TRACE=1 via TRACE_ENABLED)
    #   4) Default
    if args.log_level:
        if args.log_level == "TRACE":
            log_level = TRACE
            cfg.TRACE_ENABLED = True
        else:
            log_level = getattr(logging, args.log_level)
    elif args.verbose >= 3:
        log_level = TRACE
        cfg.TRACE_ENABLED = True
    elif args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose == 1:
        log_level = logging.INFO
    elif args.quiet:
        log_level = logging.WARNING
    elif cfg.TRACE_ENABLED:
        log_level = TRACE
    else:
        log_level = getattr(logging, cfg.LOG_LEVEL_DEFAULT)

    # Reports go to stdout, so logs stay on stderr
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    third_party_log_level = log_level if log_level >= logging.INFO else logging.INFO
    logging.getLogger("numba").setLevel(third_party_log_level)


def _run_profile(args: argparse.Namespace) -> bytes:
    profile = generate_simple_motion_profile(
        MotionState(args.start, args.start_vel),
        MotionState(args.goal, args.end_vel),
        args.max_vel,
        args.max_accel,
    )
    logger.info("Profile duration %.3fs (%d segments)", profile.duration(), len(profile))
    return encode_report(sample_profile(profile, args.dt))


def _run_trajectory(args: argparse.Namespace) -> bytes:
    builder = build_path(args.start_pose)
    for leg in args.legs or []:
        if leg[0] == "line":
            builder.line_to(leg[1])
        else:
            builder.spline_to(leg[1], leg[2])
    path = builder.build()

    constraints = GenericConstraints(
        max_vel=args.max_vel,
        max_accel=args.max_accel,
        max_ang_vel=Angle.deg(args.max_ang_vel_deg),
        max_lateral_accel=args.max_lateral_accel,
    )
    trajectory = generate_trajectory(
        path, constraints.velocity_constraint, constraints.acceleration_constraint
    )
    logger.info(
        "Trajectory length %.3f, duration %.3fs", path.length, trajectory.duration()
    )
    return encode_report(sample_trajectory(trajectory, args.dt))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the motionctl CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    if not args.dt > 0:
        parser.error(f"--dt must be positive, got {args.dt}")

    try:
        if args.command == "profile":
            payload = _run_profile(args)
        else:
            payload = _run_trajectory(args)
    except MotionError as e:
        logger.error("Planning failed: %s", e)
        return 2

    if args.output:
        with open(args.output, "wb") as f:
            f.write(payload + b"\n")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.buffer.write(payload + b"\n")
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Globe viewer: the journey from the origin to the destination drawn on a
spinning globe, with the ground-frame (red) and inertial-frame (blue) travellers.
"""

import logging
import re
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import matplotlib.animation as animation
import matplotlib.colors as mcolors
from matplotlib.patches import Circle

from coriolis import GlobeEngine
from coriolis.logging_config import setup_logging

logger = logging.getLogger("coriolis.viewer")

# --- Display Parameters ---
FIGURE_SIZE_IN = 6.0
GLOBE_COLOR = '#aaa'
GLOBE_EDGE_COLOR = '#fff'
POINT_SIZE = 12
ANIMATION_FRAMES = 180

_RGBA_RE = re.compile(r"rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)")


def to_mpl_color(tag: str):
    """Accepts the CSS-style tags the engine uses (including rgba(...))."""
    match = _RGBA_RE.fullmatch(tag.strip())
    if match is None:
        return mcolors.to_rgba(tag)
    r, g, b, a = match.groups()
    return (float(r) / 255.0, float(g) / 255.0, float(b) / 255.0, 1.0 if a is None else float(a))


@dataclass
class ViewState:
    cam_lat: float = 20.0
    cam_lon: float = 0.0
    inertial: bool = False
    show_paths: bool = True
    time: float = 0.0


def build_figure():
    fig = plt.figure(figsize=(FIGURE_SIZE_IN, FIGURE_SIZE_IN))
    ax = fig.add_subplot(111)
    ax.set_facecolor('black')
    fig.patch.set_facecolor('black')
    ax.set_aspect('equal')
    ax.set_xlim([-1.25, 1.25])
    ax.set_ylim([-1.25, 1.25])
    ax.axis('off')

    ax.add_patch(Circle((0.0, 0.0), 1.0, facecolor=GLOBE_COLOR, edgecolor=GLOBE_EDGE_COLOR, linewidth=2.0))
    scatter = ax.scatter([], [], s=POINT_SIZE, zorder=3)
    label = ax.text(0.02, 0.02, '', transform=ax.transAxes, color='white', alpha=0.6,
                    family='monospace', fontsize=10, ha='left', va='bottom')
    return fig, ax, scatter, label


def draw_frame(engine: GlobeEngine, state: ViewState, scatter, label):
    info = engine.get_frame_info(state.time, state.cam_lat, state.cam_lon, show_paths=state.show_paths)
    points = info['points']
    offsets: List[Tuple[float, float]] = [(p['position'][0], p['position'][1]) for p in points]
    colors = [to_mpl_color(p['color']) for p in points]

    if offsets:
        scatter.set_offsets(offsets)
        scatter.set_facecolors(colors)
    else:
        scatter.set_offsets([[float('nan'), float('nan')]])
    label.set_text(f"Time elapsed: {info['elapsed']}")
    return info


def advance_time(engine: GlobeEngine, state: ViewState, time_s: float) -> None:
    # In the ground view the camera spins with the planet.
    if not state.inertial:
        state.cam_lon = engine.follow_rotation(state.cam_lon, state.time, time_s)
    state.time = time_s


def animate(engine: GlobeEngine, state: ViewState, *, frames: int = ANIMATION_FRAMES):
    fig, _ax, scatter, label = build_figure()
    frames = max(2, int(frames))
    interval_ms = engine.animation_duration * 1000.0 / frames

    def update(frame):
        advance_time(engine, state, engine.eased_time(frame / (frames - 1)))
        draw_frame(engine, state, scatter, label)
        return scatter, label

    ani = animation.FuncAnimation(
        fig=fig,
        func=update,
        frames=frames,
        interval=interval_ms,
        blit=False,
        repeat=False,
    )
    return fig, ani


def parse_args(argv: Sequence[str]) -> Tuple[ViewState, Optional[str]]:
    state = ViewState()
    save_path = None
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '--inertial':
            state.inertial = True
        elif arg == '--hide-paths':
            state.show_paths = False
        elif arg in ('--cam-lat', '--cam-lon', '--save'):
            if i + 1 >= len(args):
                print(f"Missing value after {arg}; ignoring")
                break
            value = args[i + 1]
            i += 1
            if arg == '--save':
                save_path = value
            else:
                try:
                    angle = float(value)
                except ValueError:
                    print(f"Invalid angle for {arg}: {value!r}; using default")
                else:
                    if arg == '--cam-lat':
                        state.cam_lat = angle
                    else:
                        state.cam_lon = angle
        else:
            print(f"Unknown argument: {arg!r}")
        i += 1
    return state, save_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    state, save_path = parse_args(sys.argv[1:] if argv is None else argv)
    engine = GlobeEngine()
    logger.info("Animating %s view (cam_lat=%.1f, cam_lon=%.1f)",
                'inertial' if state.inertial else 'ground', state.cam_lat, state.cam_lon)

    fig, ani = animate(engine, state)
    if save_path:
        try:
            ani.save(save_path, fps=30)
        except Exception as e:
            logger.error("Error saving animation to %s: %s", save_path, e)
            return 1
        logger.info("Animation saved as %s", save_path)
        return 0

    try:
        plt.show()
    except Exception as e:
        logger.error("Could not display plot: %s", e)
        logger.error("Ensure you have a graphical backend configured for matplotlib (e.g., TkAgg, Qt5Agg).")
        return 1
    plt.close(fig)
    return 0


if __name__ == "__main__":
    sys.exit(main())

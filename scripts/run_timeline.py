import os
from warnings import warn

import matplotlib as mpl

from lifeline.timeline import configure_logging, process_file

# --- User configuration dictionary ---
CONFIG = {
    "TITLE": "My Life Line",  # figure title, overridable per timeline
    "SHOW_YEARS": False,  # label the x axis with years
    "SPACING": 0.2,  # step between events sharing a year
    "DENSITY_WINDOW": 3.0,  # years either side counted as "nearby"
    "DENSITY_AMPLIFICATION": 1.5,  # gap stretch per unit of extra density
    "MONOTONIC_STEP": 0.1,  # nudge applied when an event would not follow its predecessor
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    "SHOW_PLOTS": False,  # open each figure after saving
    # ---
    "DATA_PATH": "../data/timelines/",
    "OUTPUT_EXT": ".png",  # .png or .svg
    "TIMELINES": [
        {
            "data": "life.csv",
        },
        {
            "data": "career.csv",
            "TITLE": "Career",
            "SHOW_YEARS": True,
        },
    ],
}


def main() -> None:
    """
    Main function to render all timelines.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    analysis_dir = CONFIG["DATA_PATH"].rstrip("/") + "_timelines/"
    if not os.path.exists(analysis_dir):
        os.makedirs(analysis_dir)

    for timeline in CONFIG["TIMELINES"]:
        # Merge global config with timeline-specific overrides
        merged_config = CONFIG.copy()
        merged_config.update(timeline)

        name = merged_config["data"]
        output = analysis_dir + os.path.splitext(name)[0] + merged_config["OUTPUT_EXT"]

        process_file(
            input_path=os.path.join(merged_config["DATA_PATH"], name),
            output_path=output,
            title=merged_config.get("TITLE", "My Life Line"),
            show_years=merged_config.get("SHOW_YEARS", False),
            spacing=merged_config.get("SPACING", 0.2),
            density_window=merged_config.get("DENSITY_WINDOW", 3.0),
            density_amplification=merged_config.get("DENSITY_AMPLIFICATION", 1.5),
            monotonic_step=merged_config.get("MONOTONIC_STEP", 0.1),
            show_plot=merged_config.get("SHOW_PLOTS", False),
        )


if __name__ == "__main__":
    # Set Matplotlib rcParams directly here
    for optn, val in {
        "font.family": ("sans-serif",),
        "font.size": 11,
        "axes.titlesize": 14,
        "axes.linewidth": 1.0,
        "savefig.dpi": 100,
    }.items():
        if isinstance(val, (list, tuple)):
            val = tuple(val)
        try:
            mpl.rcParams[optn] = val
        except KeyError:
            warn(f"mpl rcparams key '{optn}' not recognised as a valid rc parameter.")
    main()

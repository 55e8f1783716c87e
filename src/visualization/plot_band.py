import matplotlib.patches as mpatches
from matplotlib.figure import Figure


def plot_band_map(boundary, bands, title="200-400 mm precipitation band"):
    """
    Draw the state boundary with the band polygons on top.

    Both layers are drawn in the bands' CRS. The Figure is built without
    pyplot, so the caller's backend is left alone; write it with
    export_figure.
    """
    if bands.crs is not None and boundary.crs != bands.crs:
        boundary = boundary.to_crs(bands.crs)

    fig = Figure(figsize=(12, 10), dpi=150)
    ax = fig.subplots()

    # Plot base layers
    boundary.plot(ax=ax, color="lightgrey", edgecolor="black", linewidth=1.5)
    handles = [mpatches.Patch(color="lightgrey", label="State boundary")]
    if not bands.empty:
        bands.plot(ax=ax, color="steelblue", alpha=0.7)
        for label in bands["label"]:
            handles.append(mpatches.Patch(color="steelblue", alpha=0.7, label=label))

    ax.legend(handles=handles)
    ax.set_title(title)
    ax.axis("off")
    return fig

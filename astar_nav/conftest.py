import matplotlib

# Plots in tests must never open a window.
matplotlib.use("Agg")

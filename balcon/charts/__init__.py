from .matplotlibwrapper import LineChart, BandChart

from .chart_2D import LineChart, BandChart

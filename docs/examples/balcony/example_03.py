"""
EXAMPLE 3
---------
Settings taken from the environment (BALCON_DEFAULT_LAT, BALCON_DEFAULT_LON,
BALCON_DEFAULT_AZM) and overridden by the query string of a shared link. The
daily profile is saved as a csv file next to this script.
"""
from pathlib import Path
from balcon.logging import ModuleLogger
from balcon.settings import Settings

ModuleLogger.set_level('balcon.sun.sampling', ModuleLogger.DEBUG)

settings = Settings.from_env(timezone='Europe/Madrid')
settings = Settings.from_query('?lat=41.3874&lon=2.1686&azm=-30', base=settings)
print(f"link: ?{settings.to_query()}")

profile = settings.profile()
print(profile.table.describe())

file_path = Path(__file__).parent / f'profile_{settings.date:%Y%m%d}.csv'
profile.table.to_csv(file_path)

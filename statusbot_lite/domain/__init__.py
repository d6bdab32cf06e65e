"""Pure skill logic: requested times, snooze math, status mapping, location stages."""

"""Part storage backends handing out short-lived read/write handles."""

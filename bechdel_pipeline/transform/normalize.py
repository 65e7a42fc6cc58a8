import html
import re


def clean_title(title: str) -> str:
	if not isinstance(title, str):
		return ""
	# 1) HTML-Entities auflösen ("Ocean&#39;s Twelve" -> "Ocean's Twelve")
	t = html.unescape(title)
	# 2) Spaces kollabieren + trimmen
	t = re.sub(r"\s+", " ", t).strip()
	return t


def normalize_flag(value) -> str | None:
	"""' pass ' -> 'PASS'; fehlende Werte bleiben None."""
	if not isinstance(value, str):
		return None
	v = value.strip().upper()
	return v or None

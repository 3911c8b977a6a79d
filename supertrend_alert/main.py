# supertrend_alert/main.py
import asyncio
import logging
import time

from fastapi import FastAPI, HTTPException

from supertrend_alert import config
from supertrend_alert.scanner import run_cycle

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="supertrend-alert")

CRON_LOCK = asyncio.Lock()
LAST_CRON_TS = 0


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/cron/run")
async def cron_run(token: str = ""):
    global LAST_CRON_TS

    secret = config.CRON_SECRET
    if not secret or token != secret:
        raise HTTPException(status_code=403, detail="Forbidden")

    now = int(time.time())
    if now - LAST_CRON_TS < config.MIN_CRON_GAP_SEC:
        return {"ok": True, "skipped": True, "reason": "cooldown"}

    if CRON_LOCK.locked():
        return {"ok": True, "skipped": True, "reason": "overlap"}

    async with CRON_LOCK:
        LAST_CRON_TS = now
        logger.info("[CRON] start")
        report = await run_cycle()

    return {
        "ok": True,
        "symbols": len(report.symbols),
        "skipped_timeframes": len(report.skipped),
        "alerts": [{"symbol": a.symbol, "rule": a.rule} for a in report.alerts],
        "sent": report.sent,
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run(app, host="0.0.0.0", port=8000)

import argparse
import asyncio
import logging

from supertrend_alert.config import LOG_LEVEL
from supertrend_alert.scanner import run_cycle, run_forever

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("cron")


async def run_job(once: bool = False):
    if once:
        report = await run_cycle()
        logger.info(f"[CRON] scanned={len(report.symbols)} alerts={len(report.alerts)} sent={report.sent}")
        return report
    await run_forever()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Multi-timeframe Supertrend alert scanner")
    parser.add_argument("--once", action="store_true", help="run a single scan cycle and exit")
    args = parser.parse_args(argv)

    logger.info("[CRON] start")
    try:
        asyncio.run(run_job(once=args.once))
    except KeyboardInterrupt:
        logger.info("[CRON] interrupted")
    logger.info("[CRON] done")

if __name__ == "__main__":
    main()

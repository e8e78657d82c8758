#!/usr/bin/env python3
"""
Job alert bot main script
"""

import argparse
import sys
from dotenv import load_dotenv
import logging
import uvicorn
from jobalert import (
    JSearchSource, JobMatcher, JobPipeline, JobScheduler, SeenStore, TelegramNotifier,
)
from jobalert.config import REQUIRED_ENV, ConfigError, load_config
from jobalert.server import create_app

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_pipeline(config: dict) -> JobPipeline:
    """Wire the pipeline components from configuration"""
    search = config['search']
    source = JSearchSource(
        api_key=search['api_key'],
        query=search['query'],
        host=search['host'],
        timeout=search['timeout'],
    )
    matcher = JobMatcher(config['job_keywords'])
    store = SeenStore(config['storage']['seen_file'])
    store.load()
    notifier = TelegramNotifier(
        bot_token=config['telegram']['bot_token'],
        chat_id=config['telegram']['chat_id'],
    )
    return JobPipeline(
        source, matcher, store, notifier,
        notify_delay=config['notifications']['delay_seconds'],
    )


def build_scheduler(config: dict) -> JobScheduler:
    pipeline = build_pipeline(config)
    return JobScheduler(
        pipeline, pipeline.store,
        interval_minutes=config['schedule']['interval_minutes'],
        timezone=config['schedule']['timezone'],
    )


def run_check(config: dict) -> int:
    """Fetch once and report match counts without sending anything"""
    counts = build_pipeline(config).dry_run()

    print("=" * 60)
    print(f"Query: {config['search']['query']}")
    print(f"Fetched: {counts['fetched']} (with id: {counts['with_id']})")
    print(f"Matched: {counts['matched']} (not yet seen: {counts['new']})")
    print("=" * 60)
    return 1 if counts['errors'] else 0


def main(argv=None):
    """Main function"""
    parser = argparse.ArgumentParser(description='Job alert bot')
    parser.add_argument('--config', '-c', default='config.yaml',
                        help='Configuration file (default: config.yaml)')
    parser.add_argument('--check', action='store_true',
                        help='Fetch and match once, print counts, send nothing')
    args = parser.parse_args(argv)

    # Load environment variables
    load_dotenv()

    required = ('RAPIDAPI_KEY',) if args.check else REQUIRED_ENV
    try:
        config = load_config(args.config, required=required)
    except ConfigError as e:
        logger.error(f"Refusing to start: {e}")
        sys.exit(1)

    if args.check:
        sys.exit(run_check(config))

    scheduler = build_scheduler(config)
    app = create_app(scheduler)

    scheduler.start()
    try:
        uvicorn.run(app, host=config['server']['host'], port=config['server']['port'])
    finally:
        scheduler.stop(timeout=5)


if __name__ == '__main__':
    main()

#!/usr/bin/env python3
"""
多邊形影像演化 - 命令列入口點

以半透明多邊形逼近一張目標圖片。演化在背景執行緒上進行，
主執行緒輪詢世代快照並回報進度；按 Ctrl-C 會要求引擎在下一個世代邊界停止，
並保存目前最佳的結果。

使用方式:
    python main_evolution.py --config configs/polygon_config.json --image target.png
    python main_evolution.py --config configs/polygon_config.json --image target.png --test
"""

import json
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, Any

from PIL import Image

from poly_evo.evolution.components import (
    AbortControl, EvolutionTask, create_evolution_engine, create_termination_conditions
)
from poly_evo.evolution.components.handlers import LoggingObserver, ProgressObserver, StatisticsObserver
from poly_evo.polygons import PolygonImageEvaluator, PolygonImageFactory, create_evolution_pipeline, render
from poly_evo.utils.visualization import plot_fitness_history

logger = logging.getLogger("main_evolution")

POLL_INTERVAL = 0.2

def load_config(config_path: str) -> Dict[str, Any]:
    """
    載入配置文件

    Args:
        config_path: 配置文件路徑

    Returns:
        配置字典
    """
    logger.info(f"📄 載入配置文件: {config_path}")

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"配置文件不存在: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        config = json.load(f)

    logger.info(f"✅ 配置載入成功: {config['experiment']['name']}")
    return config

def setup_logging(config: Dict[str, Any], verbose: bool = False):
    """依配置設置日誌等級"""
    level = 'DEBUG' if verbose else config.get('logging', {}).get('level', 'INFO')
    logging.getLogger().setLevel(getattr(logging, str(level).upper(), logging.INFO))

def print_experiment_info(config: Dict[str, Any], image_path: str):
    """打印實驗信息"""
    termination = config.get('termination', {})
    logger.info("🚀" * 30)
    logger.info(f"📋 實驗名稱: {config['experiment']['name']}")
    logger.info(f"📝 實驗描述: {config['experiment'].get('description', '')}")
    logger.info(f"🖼️  目標圖片: {image_path}")
    logger.info(f"🔢 族群大小: {config['evolution']['population_size']} (菁英 {config['evolution']['elite_count']})")
    logger.info(f"🎯 選擇策略: {config['selection']['method']}")
    logger.info(f"🛑 終止條件: {termination}")
    logger.info("🚀" * 30)

def run_task(task: EvolutionTask, abort_control: AbortControl):
    """
    在主執行緒輪詢進度直到任務結束

    Ctrl-C 只送出中止信號，仍等待引擎完成目前世代並回傳最佳解。

    Returns:
        (最佳候選解, 最後一個世代快照)
    """
    latest = None
    task.start()
    while not task.done():
        try:
            time.sleep(POLL_INTERVAL)
            updates = task.poll_updates()
            if updates:
                latest = updates[-1]
                logger.debug(f"第 {latest.generation_number} 世代: {len(latest.best_candidate)} 個多邊形")
        except KeyboardInterrupt:
            logger.warning("⚠️ 用戶中斷，等待目前世代完成...")
            abort_control.signal_abort()
    best = task.result()
    updates = task.poll_updates()
    if updates:
        latest = updates[-1]
    return best, latest

def main():
    """主函數 - 演化計算入口點"""
    parser = argparse.ArgumentParser(
        description='多邊形影像演化',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用範例:
  python main_evolution.py --config configs/polygon_config.json --image target.png
  python main_evolution.py --config configs/polygon_config.json --image target.png --test
        """
    )
    parser.add_argument('--config', required=True, help='配置文件路徑')
    parser.add_argument('--image', required=True, help='目標圖片路徑')
    parser.add_argument('--test', action='store_true', help='測試模式 (只執行少量世代)')
    parser.add_argument('--plot', action='store_true', help='保存適應度歷史圖')
    parser.add_argument('--verbose', '-v', action='store_true', help='詳細輸出模式')

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    config = load_config(args.config)
    setup_logging(config, args.verbose)

    try:
        # 測試模式：覆蓋終止條件
        if args.test:
            logger.info("🧪 測試模式啟用")
            config['termination'] = {'generation_count': 20}
            config['experiment']['records_dir'] = 'test_evolution_records'

        print_experiment_info(config, args.image)

        records_dir = Path(config['experiment'].get('records_dir', 'evolution_records'))
        records_dir.mkdir(parents=True, exist_ok=True)

        # 1. 領域組件
        target = Image.open(args.image).convert('RGB')
        polygons = config.get('polygons', {})
        factory = PolygonImageFactory(
            target.size,
            polygon_count=polygons.get('polygon_count', 2),
            vertex_count=polygons.get('vertex_count', 3),
        )
        evaluator = PolygonImageEvaluator(target, polygons.get('max_evaluation_size', 100))
        pipeline = create_evolution_pipeline(
            factory,
            config.get('operators'),
            max_polygons=polygons.get('max_polygons', 50),
            max_vertices=polygons.get('max_vertices', 10),
        )

        # 2. 引擎與觀察者
        engine = create_evolution_engine(config, factory, pipeline, evaluator)
        statistics = StatisticsObserver()
        progress = ProgressObserver(total=config['termination'].get('generation_count'), desc="Polygons")
        engine.add_observer(LoggingObserver(interval=config.get('logging', {}).get('interval', 1)))
        engine.add_observer(statistics)
        engine.add_observer(progress)

        # 3. 背景執行
        abort_control = AbortControl()
        conditions = create_termination_conditions(config, evaluator.is_natural)
        task = EvolutionTask(engine,
                             config['evolution']['population_size'],
                             config['evolution']['elite_count'],
                             *conditions,
                             abort_control=abort_control,
                             latest_only=True)
        try:
            best, final = run_task(task, abort_control)
        finally:
            progress.close()

        # 4. 保存結果
        image_file = records_dir / 'best.png'
        render(best, target.size).save(image_file)
        history = statistics.to_dataframe()
        history.to_csv(records_dir / 'fitness_history.csv')

        summary = {
            'experiment_name': config['experiment']['name'],
            'generations': len(history),
            'best_fitness': float(history['best'].iloc[-1]) if len(history) else None,
            'polygon_count': len(best),
            'final_generation': final.to_dict() if final is not None else None,
            'terminated_by': [repr(c) for c in engine.get_satisfied_termination_conditions()],
            'config': config,
        }
        summary_file = records_dir / 'experiment_summary.json'
        with open(summary_file, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)

        if args.plot:
            plot_fitness_history(history, title=config['experiment']['name'],
                                 save_path=str(records_dir / 'fitness_history.png'))

        logger.info(f"✅ 演化完成! 最佳適應度: {summary['best_fitness']}, 多邊形數: {len(best)}")
        logger.info(f"📁 結果保存於: {records_dir}")
        return best

    except Exception as e:
        logger.error(f"❌ 實驗執行失敗: {e}", exc_info=args.verbose)
        sys.exit(1)

if __name__ == "__main__":
    main()

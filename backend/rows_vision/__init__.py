"""
Rows Vision 导入 - 后端核心模块

模块结构：
- config/     运行期配置加载
- models/     数据模型定义
- multipart/  multipart/form-data 编码器（RFC 2388/7578）
- pipeline/   文件聚合/校验/请求组装与执行
"""

__version__ = "0.1.0"
